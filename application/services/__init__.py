from .conversion_service import ConversionService, Converter, bucket_by_date
from .fallback_service import FallbackConverter
from .service_factory import ServiceFactory
from .statement_parser import StatementParser

__all__ = [
	'ConversionService',
	'Converter',
	'FallbackConverter',
	'ServiceFactory',
	'StatementParser',
	'bucket_by_date',
]
