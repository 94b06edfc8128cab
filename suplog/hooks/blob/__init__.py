"""Hook that uploads log payloads to an S3-compatible store under ULID keys."""