"""
Error taxonomy for identifier construction and resource reads.
"""


class AzresError(Exception):
    pass


class ResourceIdError(AzresError, ValueError):
    """Structural violation of the resource identifier grammar."""

    def __init__(self, message: str, value: str = ""):
        super().__init__(message)
        self.value = value


class InvalidResourceType(ResourceIdError):
    pass


class InvalidResourceName(ResourceIdError):
    pass


class InvalidParentId(ResourceIdError):
    pass


class MalformedResourceId(ResourceIdError):
    pass


class ResourceNotFound(AzresError):
    """Raised by a resource client when the addressed resource does not exist."""

    def __init__(self, resource_id: str):
        super().__init__(f"resource {resource_id!r} was not found")
        self.resource_id = resource_id


class ResourceReadError(AzresError):
    pass
