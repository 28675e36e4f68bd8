import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.schemas import ConversionFailedResponse
from domain.exceptions.conversion import ConfigurationError, ConversionFailedError, EmptyInputError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ConfigurationError)
	async def configuration_error_handler(request: Request, exc: ConfigurationError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(EmptyInputError)
	async def empty_input_handler(request: Request, exc: EmptyInputError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(ConversionFailedError)
	async def conversion_failed_handler(request: Request, exc: ConversionFailedError):
		logger.error(f'Conversion failed: {exc}')
		body = ConversionFailedResponse.from_document(
			'Exchange rate service unavailable', exc.failed
		)
		return JSONResponse(status_code=502, content=body.model_dump(mode='json'))
