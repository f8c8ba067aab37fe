'''
Caixa API - Main application entry point

This file initializes the FastAPI application and defines the root endpoint.
Stateless: callers send the records, the engine returns summaries, import
partitions and parsed statements.
'''
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from caixa.core.config import settings
from caixa.core.logging_config import setup_logging
from caixa.routes import statements
from caixa.routes import summaries
from caixa.routes import transactions

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Classificação de transações e conciliação mensal (entradas, saídas, saldo)",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS (allows frontend to call API)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(summaries.router)
app.include_router(transactions.router)
app.include_router(statements.router)


# Root endpoint - Health check
@app.get("/")
def root():
    """
    Health check endpoint
    Returns basic API info
    """
    return {
        "app": "Caixa",
        "message": "Caixa API is running",
        "status": "healthy",
        "version": settings.VERSION,
        "docs": "/docs"
    }


# Health endpoint (useful for deployment monitoring)
@app.get("/health")
def health_check():
    """Detailed health check"""
    return {
        "status": "ok",
        "app": "Caixa",
        "storage": "none (stateless engine)",
    }


# This runs when you execute: uvicorn caixa.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
