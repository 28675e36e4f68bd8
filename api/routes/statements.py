from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_converter
from api.schemas import StatementConversionRequest, StatementConversionResponse
from application.services import Converter
from domain.models.statement import Document

router = APIRouter(prefix='/api', tags=['statements'])


@router.post(
	'/statements/convert',
	response_model=StatementConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert every transaction of a statement into one currency',
)
async def convert_statement(
	request: StatementConversionRequest,
	converter: Annotated[Converter, Depends(get_converter)],
) -> StatementConversionResponse:
	document = Document([t.to_domain() for t in request.transactions])
	result = await converter.convert(request.target_currency, document)
	return StatementConversionResponse.from_result(request.target_currency, result)
