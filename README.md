# suplog

Building blocks for structured logging and error reporting. The package needs
only the standard library and runs on Python 3.10 or later.

## What is in it

- `suplog.levels`: `Level` and `parse_level()`. `Level` is an `IntEnum` that
  runs from `PANIC` (0, most severe) to `TRACE` (6). `parse_level()` ignores
  case and accepts both `"warn"` and `"warning"`. It raises `ValueError` for an
  unknown name. `str(Level.WARN)` is `"warning"`.
- `suplog.entry`: `Entry`, `Hook` and `ERROR_KEY`. An entry holds `data`,
  `level`, `message`, `time` and `context`. `Entry.with_data()` returns a copy
  with one more field. `Hook` is a protocol with `levels()` and `fire(entry)`.
- `suplog.deferred`: `Ref`, `deferred_key()` and `DeferredHook`. Put a `Ref`
  under `deferred_key(name)`. When the entry fires, `DeferredHook` replaces it
  with the current value under `name`. The rules are:
  - a `Ref` holding `None` is dropped;
  - values that are not errors, strings, bools, ints, floats, complex numbers or
    `timedelta`s become `<unsupported Ref[...]>`;
  - anything other than a `Ref` becomes `<unsupported ...>`.
- `suplog.error_level`: `with_error_level()` and `ErrorLevelHook`. If an entry's
  context was built with `with_error_level()` and its `"error"` field holds an
  exception, the hook raises the entry's level to the requested one. It only
  does so when that level is more severe.
- `suplog.fields`: `copy_fields()` and `with_more()` return new dicts and leave
  their inputs alone.
- `suplog.hooks.blob.ulid`: `encode_ulid()` and `new_blob_id()`. These give
  26-character, Crockford base32 identifiers that sort by time.
- `suplog.hooks.blob.hook`: `BlobHook`, `HookOptions`, `check_hook_options()`,
  `S3Remote`, `S3Spec` and `RootLogger`.
  - `check_hook_options()` fills empty options from `APP_ENV` and the
    `LOG_BLOB_STORE_*` environment variables. The environment defaults to
    `"local"` and retention to 30 days. Uploads are enabled in `prod`, `staging`
    and `test`.
  - `BlobHook` takes a `str` or bytes-like `blob` field and uploads it through an
    `S3Remote` under `<env>/<ulid>`. It replaces the field with
    `<blob_store_url or env>/<ulid>`. Any other blob value is removed. Problems
    are reported through the logger's `warningf`/`errorf`/`debugf`.
- `suplog.bugsnag`: error-report tooling.
  - `errors`: `TracedError`, `StackFrame`, `UncaughtPanic`, `PanicParseError`,
    `new_error()`, `errorf()`, `parse_panic()`, `MAX_STACK_DEPTH`
  - `metadata`: `MetaData` (`merge`, `add`, `add_struct`, `sanitize`) and
    `Sanitizer`. Keys that match a filter become `[FILTERED]`; cycles become
    `[RECURSION]`.
  - `configuration`: `Configuration`, `Endpoints`, `EndpointConfigError`
  - `event`: `new_event()`, `Event`, `Severity`, `SeverityReason`,
    `HandledState`, `User`, `Context`, `ErrorClass`, `EventStackFrame`
  - `middleware`: `MiddlewareStack`. Callbacks run newest first. A returned
    error stops the run. An exception a callback raises is logged, and the run
    goes on.
  - `device`: `get_hostname()`, `get_runtime_versions()`, `add_version()`,
    `reset_runtime_versions()`
  - `headers`: `prefixed_headers()`

## What it does not do

- There is no logger object that formats entries and writes them out. You
  create `Entry` values and run hooks on them yourself.
- `S3Remote` is an abstract base class. No S3 client is included, so you supply
  the subclass that talks to your store. A `BlobHook` built without a remote
  logs an error and then drops every blob it sees.
- The `suplog.bugsnag` modules build, configure and filter reports, but nothing
  sends them over the network or tracks sessions.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Parse a level name:

```python
from suplog.levels import Level, parse_level

assert parse_level("Warning") is Level.WARN
```

Resolve a deferred field when the entry fires:

```python
from suplog.deferred import DeferredHook, Ref, deferred_key
from suplog.entry import Entry

name = Ref()
entry = Entry(message="done").with_data(deferred_key("name"), name)
name.value = "Alice"
DeferredHook().fire(entry)
assert entry.data == {"name": "Alice"}
```

Raise the level of an entry that carries an error:

```python
from suplog.entry import Entry
from suplog.error_level import ErrorLevelHook, with_error_level
from suplog.levels import Level

entry = Entry(
    level=Level.DEBUG,
    data={"error": ValueError("fail")},
    context=with_error_level(None, Level.ERROR),
)
ErrorLevelHook().fire(entry)
assert entry.level is Level.ERROR
```

Offload a blob through your own remote:

```python
from suplog.entry import Entry
from suplog.hooks.blob.hook import BlobHook, HookOptions, S3Remote, S3Spec


class MemoryRemote(S3Remote):
    def __init__(self):
        self.objects = {}

    def check_access(self, key):
        pass

    def put_object(self, key, body, meta):
        self.objects[key] = body.read()
        return S3Spec(key=key, meta=meta)


class PrintLogger:
    def warningf(self, format, *args): print(format % args)
    def errorf(self, format, *args): print(format % args)
    def debugf(self, format, *args): print(format % args)
    def printf(self, format, *args): print(format % args)


remote = MemoryRemote()
hook = BlobHook(PrintLogger(), HookOptions(env="test"), remote)
entry = Entry(data={"blob": b"large payload"})
hook.fire(entry)
print(entry.data["blob"])   # e.g. test/01J... (or LOG_BLOB_STORE_URL/01J...)
```

Sanitise report metadata:

```python
from suplog.bugsnag.metadata import MetaData

meta = MetaData()
meta.add("account", "password", "password")
meta.add("account", "plan", "premium")
print(meta.sanitize(["password"]))
# {'account': {'password': '[FILTERED]', 'plan': 'premium'}}
```

Parse the text a crashed program printed:

```python
from suplog.bugsnag.errors import parse_panic

panic_text = (
    "panic: hello!\n"
    "\n"
    "goroutine 1 [running]:\n"
    "main.main()\n"
    "\t/app/main.go:12 +0x1f\n"
)
err = parse_panic(panic_text)
print(err.type_name(), str(err))          # panic hello!
for frame in err.stack_frames():
    print(frame.package, frame.name, frame.file, frame.line_number)
# main main /app/main.go 12
```

Run before-notify callbacks:

```python
from suplog.bugsnag.configuration import Configuration
from suplog.bugsnag.event import Severity, new_event
from suplog.bugsnag.middleware import MiddlewareStack

event, config = new_event([ValueError("boom"), Severity.ERROR], Configuration())
stack = MiddlewareStack()
stack.on_before_notify(lambda e, c: e.meta_data.add("tab", "key", "value"))
stack.run(event, config, lambda: None)
assert event.meta_data == {"tab": {"key": "value"}}
```