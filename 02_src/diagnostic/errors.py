"""Error taxonomy for the diagnostic service."""


class DiagnosticError(Exception):
    """Base class for all service errors."""


class ConfigurationError(DiagnosticError):
    """A required credential is not configured."""


class GatewayError(DiagnosticError):
    """Chat endpoint unreachable or returned unusable content."""


class SynthesisFailure(DiagnosticError):
    """Speech synthesis unreachable or returned no audio."""


class CaptureError(DiagnosticError):
    """Speech-to-text failed mid-capture."""


class CapabilityUnavailable(DiagnosticError):
    """The platform has no speech-to-text capability."""
