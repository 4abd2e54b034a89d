"""Deposit Velocity Limits API.

Accepts or rejects customer deposits against daily and weekly monetary
caps and a daily deposit count cap. Account state lives in memory for
the lifetime of the process.

Run with:
    python3 -m uvicorn deposit_limiter.main:app --host 0.0.0.0 --port 8000
"""

import os
from typing import Dict

from fastapi import FastAPI

from deposit_limiter.config import load_limits_config
from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.logging_config import logger, setup_logging
from deposit_limiter.routes import accounts, deposits, limits, verification
from deposit_limiter.storage.memory import AccountStore

app = FastAPI(
    title="Deposit Velocity Limits API",
    description=(
        "Per-customer deposit velocity enforcement. Rejects loads that "
        "would exceed the daily or weekly amount limit or the daily "
        "deposit count limit."
    ),
    version="1.0.0",
)


@app.on_event("startup")
async def startup() -> None:
    """Configure logging, load limits and initialize the limiter."""
    setup_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        fmt=os.getenv("LOG_FORMAT", "json"),
    )

    config = load_limits_config()
    store = AccountStore()
    limiter = DepositLimiter(store=store, config=config)

    # Attach to app state for dependency injection in routes
    app.state.limiter = limiter
    app.state.store = store
    app.state.config = config

    logger.info(
        "limiter_started",
        daily_deposit_limit=str(config.daily_deposit_limit),
        weekly_deposit_limit=str(config.weekly_deposit_limit),
        daily_deposit_count_limit=config.daily_deposit_count_limit,
        customer_overrides=len(config.customer_overrides),
    )


# Mount all API routers
app.include_router(deposits.router)
app.include_router(accounts.router)
app.include_router(limits.router)
app.include_router(verification.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
