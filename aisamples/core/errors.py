class SampleError(Exception):
    pass


class ConfigurationError(SampleError, ValueError):
    """Missing or malformed configuration: env vars, connection targets."""
    pass


class UriFormatError(ConfigurationError):
    pass


class UnsupportedAuthTypeError(ConfigurationError):

    def __init__(self, auth_type):
        super().__init__(f"Connection authentication type '{auth_type}' is not supported")
        self.auth_type = auth_type


class RemoteServiceError(SampleError):
    """An error reported by the service inside an otherwise successful call, e.g. a stream error event."""
    pass


class RunTimeoutError(SampleError, TimeoutError):

    def __init__(self, run_id, attempts, elapsed):
        super().__init__(f"Run {run_id} did not reach a terminal status after {attempts} attempts ({elapsed:.1f}s)")
        self.run_id = run_id
        self.attempts = attempts
        self.elapsed = elapsed


class ContractViolationError(SampleError, AssertionError):
    pass


class OperationCancelledError(SampleError):
    pass
