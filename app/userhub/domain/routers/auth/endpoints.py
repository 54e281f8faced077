from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from fastapi_problem.error import StatusProblem
from userhub.core.dependencies import get_auth_service
from userhub.core.exceptions import errors
from userhub.core.helpers.response import IResponseBase, build_json_response
from userhub.core.logging import get_logger
from userhub.domain.schemas import AuthLoginRequest, AuthLoginResponse
from userhub.domain.services import AuthService

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=IResponseBase[AuthLoginResponse],
    status_code=status.HTTP_200_OK,
)
async def login(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    body: Annotated[AuthLoginRequest, Body(..., description="Login credentials")],
) -> IResponseBase[AuthLoginResponse]:
    """
    Exchange email and password for an access token
    """
    try:
        data = await auth_service.login(email=body.email, password=body.password)

        return build_json_response(data=data, message="User login successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error occurred during login: {e}")
        raise errors.InternalServerError(
            detail="Failed to login",
        ) from e
