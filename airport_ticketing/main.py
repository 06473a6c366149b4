from fastapi import FastAPI
from airport_ticketing.config import settings
from airport_ticketing.exception_handlers import register_exception_handlers
from airport_ticketing.itineraries import router as itineraries_router
from airport_ticketing.tickets import router as tickets_router

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Airport ticket issuance API",
    docs_url="/docs",
    redoc_url="/redoc"
)

register_exception_handlers(app)

# Include routers
app.include_router(
    itineraries_router.router,
    prefix=f"{settings.API_V1_STR}/itineraries",
    tags=["Itineraries"]
)

app.include_router(
    tickets_router.router,
    prefix=f"{settings.API_V1_STR}/tickets",
    tags=["Ticket Issuance"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Airport Ticket Issuance API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
