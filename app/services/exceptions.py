# app/services/exceptions.py

class ServiceError(Exception):
    """Clase base para errores de la capa de servicio."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class BadRequestError(ServiceError):
    """La operación delegada no pudo completarse con los datos recibidos."""
    pass


class ResourceNotFoundError(ServiceError):
    """Recurso no encontrado."""
    pass


class InvalidLocalizationContextError(TypeError):
    """The localization context is missing or has no callable ``t``."""

    def __init__(self, received: object):
        self.received = received
        super().__init__(
            f"A localization context with a callable 't' is required, got {type(received).__name__}"
        )
