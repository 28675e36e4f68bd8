from .requests import StatementConversionRequest, TransactionRequest
from .responses import (
	ConversionFailedResponse,
	ConversionSummary,
	StatementConversionResponse,
	TransactionResponse,
)

__all__ = [
	'ConversionFailedResponse',
	'ConversionSummary',
	'StatementConversionRequest',
	'StatementConversionResponse',
	'TransactionRequest',
	'TransactionResponse',
]
