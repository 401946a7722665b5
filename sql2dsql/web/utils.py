"""
Utility functions for the web application.
"""
from fastapi.datastructures import FormData


def get_form_str(form_data: FormData, key: str, *, strip: bool = True) -> str | None:
    """
    Avoids Type UploadFile. Safely retrieve a string value from FormData.
    Missing keys give None; blank values give "" (not None) so a user can
    submit an empty editor.
    """
    val = form_data.get(key)
    if val is None:
        return None
    if not isinstance(val, str):
        raise ValueError(f"Expected string-like value, got UploadFile: {getattr(val, 'filename', 'unknown')}")
    return val.strip() if strip else val
