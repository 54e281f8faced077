from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, status
from fastapi_problem.error import StatusProblem
from userhub.core.dependencies import get_account_service
from userhub.core.exceptions import errors
from userhub.core.helpers.response import IResponseBase, build_json_response
from userhub.core.logging import get_logger
from userhub.domain.schemas import AccountCreate, AccountPasswordUpdate, AccountProfile, AccountUpdate, ActivityFeed
from userhub.domain.services import AccountService

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=IResponseBase[AccountProfile],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    account_data: Annotated[AccountCreate, Body(..., description="New account details")],
) -> IResponseBase[AccountProfile]:
    """
    Register a new account
    """
    try:
        data = await account_service.create_account(account_data)

        return build_json_response(
            data=data,
            message="User created successfully!",
            status=status.HTTP_201_CREATED,
        )
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error("Error creating account", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to create user",
        ) from e


@router.get(
    "",
    response_model=IResponseBase[list[AccountProfile]],
    status_code=status.HTTP_200_OK,
)
async def get_users(
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> IResponseBase[list[AccountProfile]]:
    """
    List every account
    """
    try:
        data = await account_service.get_accounts()

        return build_json_response(data=data, message="Users retrieved successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error("Error listing accounts", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to retrieve users",
        ) from e


@router.get(
    "/{id}",
    response_model=IResponseBase[AccountProfile],
    status_code=status.HTTP_200_OK,
)
async def get_user_by_id(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    id: Annotated[str, Path(..., description="Account id")],
) -> IResponseBase[AccountProfile]:
    try:
        data = await account_service.get_account(id)

        return build_json_response(data=data, message="User retrieved successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error retrieving account {id}", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to retrieve user",
        ) from e


@router.patch(
    "/{id}",
    response_model=IResponseBase[AccountProfile],
    status_code=status.HTTP_200_OK,
)
async def update_user_by_id(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    id: Annotated[str, Path(..., description="Account id")],
    account_update: Annotated[AccountUpdate, Body(..., description="Fields to update")],
) -> IResponseBase[AccountProfile]:
    """
    Update profile fields of an account
    """
    try:
        data = await account_service.update_account(id, account_update)

        return build_json_response(data=data, message="User updated successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error updating account {id}", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to update user",
        ) from e


@router.delete(
    "/{id}",
    response_model=IResponseBase[None],
    status_code=status.HTTP_200_OK,
)
async def delete_user_by_id(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    id: Annotated[str, Path(..., description="Account id")],
) -> IResponseBase[None]:
    try:
        await account_service.delete_account(id)

        return build_json_response(data=None, message="User deleted successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error deleting account {id}", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to delete user",
        ) from e


@router.put(
    "/{id}/password",
    response_model=IResponseBase[None],
    status_code=status.HTTP_200_OK,
)
async def change_password(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    id: Annotated[str, Path(..., description="Account id")],
    body: Annotated[AccountPasswordUpdate, Body(..., description="New password")],
) -> IResponseBase[None]:
    """
    Replace the account password
    """
    try:
        await account_service.change_password(id, body.password)

        return build_json_response(data=None, message="Password changed successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error changing password for account {id}", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to change password",
        ) from e


@router.get(
    "/{id}/activity",
    response_model=IResponseBase[ActivityFeed],
    status_code=status.HTTP_200_OK,
)
async def get_activity_feed(
    account_service: Annotated[AccountService, Depends(get_account_service)],
    id: Annotated[str, Path(..., description="Account id")],
) -> IResponseBase[ActivityFeed]:
    """
    Posts, comments and votes authored by the account
    """
    try:
        data = await account_service.get_activity_feed(id)

        return build_json_response(data=data, message="User activity retrieved successfully!")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.error(f"Error retrieving activity for account {id}", exc_info=e)
        raise errors.InternalServerError(
            detail="Failed to retrieve user activity",
        ) from e
