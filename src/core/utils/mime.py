from core.utils.constants import (
    OCTET_STREAM_CONTENT_TYPE,
    SVG_CONTENT_TYPE,
    SVG_EXTENSION,
)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def normalize_content_type(declared_content_type: str | None, extension: str) -> str:
    """Pick the content type an uploaded object is stored and served with.

    SVG files declared without a type (or as a generic octet stream) are
    served as SVG so browsers render them. Other files without a type fall back
    to the octet stream type. A declared type is otherwise kept unchanged.
    """
    declared_blank = _is_blank(declared_content_type)
    declared_generic = declared_blank or (
        declared_content_type is not None
        and declared_content_type.lower() == OCTET_STREAM_CONTENT_TYPE
    )

    if declared_generic and extension.lower() == SVG_EXTENSION:
        return SVG_CONTENT_TYPE

    if declared_blank:
        return OCTET_STREAM_CONTENT_TYPE

    return str(declared_content_type)
