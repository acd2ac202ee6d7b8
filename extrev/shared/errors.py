"""HTTP error helpers shared by the form routes"""

from fastapi import HTTPException


def form_error_target(path: str) -> str:
    """'/client/form/abc' -> '#client_errors'"""
    segment = path.strip("/").split("/")[0] or "form"
    return f"#{segment}_errors"


def form_error(form: str, detail: str, status_code: int = 400) -> HTTPException:
    """A rejected form submission, retargeted at the form's error container"""
    return HTTPException(
        status_code=status_code,
        detail=detail,
        headers={"HX-Retarget": f"#{form}_errors"},
    )
