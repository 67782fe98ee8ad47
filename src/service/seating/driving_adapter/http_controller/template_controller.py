from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.create_template_use_case import CreateTemplateUseCase
from src.service.seating.app.command.delete_layout_use_case import DeleteLayoutUseCase
from src.service.seating.app.command.propagate_template_use_case import (
    PropagateTemplateUseCase,
)
from src.service.seating.app.command.update_template_use_case import UpdateTemplateUseCase
from src.service.seating.app.query.get_layout_use_case import GetLayoutUseCase
from src.service.seating.app.query.list_instances_use_case import ListInstancesUseCase
from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.driving_adapter.schema.layout_schema import (
    InstanceSyncFailureResponse,
    InstanceSyncSummaryResponse,
    LayoutResponse,
    PropagationResponse,
    ReconciliationResponse,
    TemplateCreateRequest,
    TemplateUpdateRequest,
    TemplateUpdateResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_template(
    request: TemplateCreateRequest,
    use_case: CreateTemplateUseCase = Depends(CreateTemplateUseCase.depends),
) -> LayoutResponse:
    template = await use_case.create_template(
        name=request.name,
        description=request.description,
        floor_specs=[spec.to_value() for spec in request.floor_specs],
    )
    return LayoutResponse.from_entity(template)


@router.get('/{template_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_template(
    template_id: int,
    use_case: GetLayoutUseCase = Depends(GetLayoutUseCase.depends),
) -> LayoutResponse:
    template = await use_case.get_layout(layout_id=template_id, kind=LayoutKind.TEMPLATE)
    return LayoutResponse.from_entity(template)


@router.patch('/{template_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_template(
    template_id: int,
    request: TemplateUpdateRequest,
    use_case: UpdateTemplateUseCase = Depends(UpdateTemplateUseCase.depends),
) -> TemplateUpdateResponse:
    result = await use_case.update_template(
        template_id=template_id,
        name=request.name,
        description=request.description,
        floor_specs=(
            [spec.to_value() for spec in request.floor_specs]
            if request.floor_specs is not None
            else None
        ),
        regenerate_units=request.regenerate_units,
        expected_version=request.expected_version,
    )
    regeneration = result.regeneration
    return TemplateUpdateResponse(
        template=LayoutResponse.from_entity(result.template),
        regeneration=(
            ReconciliationResponse(
                created=regeneration.created,
                updated=regeneration.updated,
                deactivated=regeneration.deactivated,
                total_active_seats=regeneration.total_active_seats,
            )
            if regeneration
            else None
        ),
    )


@router.delete('/{template_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_template(
    template_id: int,
    get_use_case: GetLayoutUseCase = Depends(GetLayoutUseCase.depends),
    delete_use_case: DeleteLayoutUseCase = Depends(DeleteLayoutUseCase.depends),
) -> None:
    await get_use_case.get_layout(layout_id=template_id, kind=LayoutKind.TEMPLATE)
    await delete_use_case.delete_layout(layout_id=template_id)


@router.get('/{template_id}/instances', status_code=status.HTTP_200_OK)
@Logger.io
async def list_template_instances(
    template_id: int,
    use_case: ListInstancesUseCase = Depends(ListInstancesUseCase.depends),
) -> List[LayoutResponse]:
    instances = await use_case.list_instances(template_id=template_id)
    return [LayoutResponse.from_entity(instance) for instance in instances]


@router.post('/{template_id}/propagate', status_code=status.HTTP_200_OK)
@Logger.io
async def propagate_template(
    template_id: int,
    use_case: PropagateTemplateUseCase = Depends(PropagateTemplateUseCase.depends),
) -> PropagationResponse:
    """Sync every non-customized instance with the template's current units and zones."""
    result = await use_case.propagate(template_id=template_id)
    return PropagationResponse(
        template_id=result.template_id,
        summaries=[
            InstanceSyncSummaryResponse(
                instance_id=summary.instance_id,
                created=summary.created,
                updated=summary.updated,
                deleted=summary.deleted,
            )
            for summary in result.summaries
        ],
        failures=[
            InstanceSyncFailureResponse(instance_id=failure.instance_id, error=failure.error)
            for failure in result.failures
        ],
        skipped_customized=result.skipped_customized,
    )
