from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_provider_names

router = APIRouter(tags=['health'])


@router.get('/health', summary='Service liveness and configured rate providers')
async def health(providers: Annotated[list[str], Depends(get_provider_names)]) -> dict:
	return {'status': 'healthy', 'providers': providers}
