"""
Minibank HTTP API

FastAPI application exposing one in-memory Ledger. Business-rule violations
surface as 400 responses (404 for unknown accounts) carrying the error kind.
"""

from decimal import Decimal
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from . import __version__
from .exceptions import AccountNotFoundError, LedgerError
from .ledger import Ledger
from .logging_config import get_logger
from .reporting import account_summary, generate_report
from .schemas import (
    AmountRequest, CreateAccountRequest, TransferRequest, UpdateHolderRequest,
    balance_change_response
)


logger = get_logger("minibank.api")


def get_ledger(request: Request) -> Ledger:
    """Ledger owned by the running application"""
    return request.app.state.ledger


def _parse_amount(parse) -> Decimal:
    try:
        return parse()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def create_app(ledger: Optional[Ledger] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Minibank Ledger API",
        description="In-memory banking ledger with savings, checking and premium accounts",
        version=__version__
    )
    app.state.ledger = ledger if ledger is not None else Ledger()

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        status_code = 404 if isinstance(exc, AccountNotFoundError) else 400
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "error": exc.kind}
        )

    @app.get("/health")
    async def health_check(ledger: Ledger = Depends(get_ledger)):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "minibank_api",
            "version": __version__,
            "accounts": len(ledger)
        }

    @app.post("/accounts", status_code=status.HTTP_201_CREATED)
    async def create_account(request: CreateAccountRequest,
                             ledger: Ledger = Depends(get_ledger)):
        """Create a new account"""
        try:
            variant = request.to_variant()
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown account variant: {request.variant}")
        initial_balance = _parse_amount(request.to_amount)

        account = ledger.create_account(variant, request.holder_name, initial_balance)
        return {
            **account_summary(account),
            "message": "Account created successfully"
        }

    @app.get("/accounts")
    async def list_accounts(ledger: Ledger = Depends(get_ledger)):
        """List all accounts"""
        return {"accounts": [account_summary(account) for account in ledger.accounts()]}

    @app.get("/accounts/{account_number}")
    async def get_account(account_number: str, ledger: Ledger = Depends(get_ledger)):
        """Get account details"""
        return account_summary(ledger.get_account(account_number))

    @app.put("/accounts/{account_number}/holder")
    async def update_holder(account_number: str, request: UpdateHolderRequest,
                            ledger: Ledger = Depends(get_ledger)):
        """Change the holder name"""
        account = ledger.get_account(account_number)
        account.holder_name = request.holder_name
        return account_summary(account)

    @app.post("/accounts/{account_number}/deposit")
    async def deposit(account_number: str, request: AmountRequest,
                      ledger: Ledger = Depends(get_ledger)):
        """Make a deposit"""
        amount = _parse_amount(request.to_amount)
        return balance_change_response(ledger.deposit(account_number, amount))

    @app.post("/accounts/{account_number}/withdraw")
    async def withdraw(account_number: str, request: AmountRequest,
                       ledger: Ledger = Depends(get_ledger)):
        """Make a withdrawal"""
        amount = _parse_amount(request.to_amount)
        return balance_change_response(ledger.withdraw(account_number, amount))

    @app.get("/accounts/{account_number}/interest")
    async def preview_interest(account_number: str, ledger: Ledger = Depends(get_ledger)):
        """Interest the account would earn this period, without applying it"""
        account = ledger.get_account(account_number)
        return {
            "account_number": account_number,
            "interest": str(account.calculate_interest().amount),
            "balance": str(account.balance.amount)
        }

    @app.post("/transfers")
    async def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
        """Transfer between two accounts; failures return 422 with the reason"""
        result = ledger.transfer(
            request.from_account_number, request.to_account_number, request.amount
        )
        content = {
            "success": result.success,
            "reason": result.reason,
            "error": result.error,
            "from_account_number": result.from_account_number,
            "to_account_number": result.to_account_number,
            "amount": str(result.amount.amount) if result.amount is not None else None
        }
        status_code = 200 if result.success else status.HTTP_422_UNPROCESSABLE_ENTITY
        return JSONResponse(status_code=status_code, content=content)

    @app.post("/batch/monthly-interest")
    async def apply_monthly_interest(ledger: Ledger = Depends(get_ledger)):
        """Post interest to every interest-bearing account"""
        credited = ledger.apply_monthly_interest()
        return {"credited": {number: str(amount.amount) for number, amount in credited.items()}}

    @app.post("/batch/reset-counters")
    async def reset_monthly_counters(ledger: Ledger = Depends(get_ledger)):
        """Start a new withdrawal period"""
        return {"accounts_reset": ledger.reset_monthly_counters()}

    @app.get("/report")
    async def report(ledger: Ledger = Depends(get_ledger)):
        """Accounts report as lines of text"""
        lines: List[str] = []
        generate_report(ledger, lines.append)
        return {"lines": lines}

    return app


app = create_app()


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Run the FastAPI server"""
    logger.info(f"Starting Minibank API on {host}:{port}")
    uvicorn.run(
        "minibank.api:app",
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )
