from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.create_instance_use_case import CreateInstanceUseCase
from src.service.seating.app.command.reset_customization_use_case import (
    ResetCustomizationUseCase,
)
from src.service.seating.app.command.update_instance_use_case import UpdateInstanceUseCase
from src.service.seating.app.query.get_layout_use_case import GetLayoutUseCase
from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.driving_adapter.schema.layout_schema import (
    InstanceCreateRequest,
    InstanceUpdateRequest,
    LayoutResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_instance(
    request: InstanceCreateRequest,
    use_case: CreateInstanceUseCase = Depends(CreateInstanceUseCase.depends),
) -> LayoutResponse:
    instance = await use_case.create_instance(
        template_id=request.template_id,
        name=request.name,
        description=request.description,
    )
    return LayoutResponse.from_entity(instance)


@router.get('/{instance_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_instance(
    instance_id: int,
    use_case: GetLayoutUseCase = Depends(GetLayoutUseCase.depends),
) -> LayoutResponse:
    instance = await use_case.get_layout(layout_id=instance_id, kind=LayoutKind.INSTANCE)
    return LayoutResponse.from_entity(instance)


@router.patch('/{instance_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_instance(
    instance_id: int,
    request: InstanceUpdateRequest,
    use_case: UpdateInstanceUseCase = Depends(UpdateInstanceUseCase.depends),
) -> LayoutResponse:
    instance = await use_case.update_instance(
        instance_id=instance_id,
        name=request.name,
        description=request.description,
    )
    return LayoutResponse.from_entity(instance)


@router.post('/{instance_id}/reset-customization', status_code=status.HTTP_200_OK)
@Logger.io
async def reset_instance_customization(
    instance_id: int,
    use_case: ResetCustomizationUseCase = Depends(ResetCustomizationUseCase.depends),
) -> LayoutResponse:
    instance = await use_case.reset_customization(instance_id=instance_id)
    return LayoutResponse.from_entity(instance)
