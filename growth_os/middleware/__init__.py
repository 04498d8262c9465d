from growth_os.middleware.telemetry import TelemetryMiddleware

__all__ = ["TelemetryMiddleware"]
