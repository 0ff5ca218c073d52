from fastapi import APIRouter, Depends, status

from src.app.use_cases.auth import AccountResponse, Principal
from src.depends import get_current_account

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountResponse)
async def get_me(principal: Principal = Depends(get_current_account)):
    """
    Current account as established from the bearer token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
    """
    return AccountResponse(
        id=principal.account_id,
        name=principal.name,
        username=principal.username,
        email=principal.email,
        role=principal.role,
    )
