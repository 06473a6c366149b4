from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from airport_ticketing.exceptions import CapacityExceededError, TicketingError

async def ticketing_error_handler(request: Request, exc: TicketingError) -> JSONResponse:
    content = {
        "detail": exc.message,
        "error_code": exc.error_code,
        "retryable": exc.retryable,
    }
    if isinstance(exc, CapacityExceededError):
        content["flight_ids"] = exc.flight_ids
    return JSONResponse(status_code=exc.status_code, content=content)

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TicketingError, ticketing_error_handler)
