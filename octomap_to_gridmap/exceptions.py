class ProjectionError(Exception):
    """A volumetric map could not be projected; the message is dropped."""


class OctomapFormatError(ProjectionError):
    """The message does not carry a single binary OcTree."""


class OctomapDecodeError(ProjectionError):
    """The payload could not be reconstructed into an OcTree."""
