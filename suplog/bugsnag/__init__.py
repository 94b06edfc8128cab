"""Error-report tooling: traced errors, panic parsing, metadata, configuration, events, middleware, device facts and headers."""