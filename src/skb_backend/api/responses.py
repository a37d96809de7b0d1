"""Response envelope helpers."""

from fastapi.responses import JSONResponse


def failure(status_code: int, error: str) -> JSONResponse:
    """Return the uniform error envelope."""
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error}
    )
