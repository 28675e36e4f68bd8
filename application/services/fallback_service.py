import logging

from application.services.conversion_service import Converter
from domain.exceptions.conversion import ConversionFailedError
from domain.models.statement import ConversionResult, Document

logger = logging.getLogger(__name__)


class FallbackConverter:
    """Retries whatever the primary converter could not convert on a secondary one."""

    def __init__(self, primary: Converter, secondary: Converter):
        self.primary = primary
        self.secondary = secondary

    async def convert(self, target_currency: str, document: Document) -> ConversionResult:
        try:
            primary = await self.primary.convert(target_currency, document)
        except ConversionFailedError as e:
            logger.warning(f"Primary conversion failed entirely, retrying {len(e.failed)} transactions: {e}")
            primary = ConversionResult(converted=Document(), failed=e.failed, errors=list(e.errors))

        if not primary.failed.transactions:
            return primary

        logger.info(f"Retrying {len(primary.failed)} unconverted transactions with fallback converter")
        try:
            secondary = await self.secondary.convert(target_currency, primary.failed)
        except ConversionFailedError as e:
            errors = primary.errors + list(e.errors)
            if not primary.converted.transactions:
                raise ConversionFailedError(
                    f"no transactions converted by either converter: {e}",
                    failed=e.failed,
                    errors=errors,
                ) from e
            secondary = ConversionResult(converted=Document(), failed=e.failed, errors=list(e.errors))

        return ConversionResult(
            converted=Document(primary.converted.transactions + secondary.converted.transactions),
            failed=secondary.failed,
            errors=primary.errors + secondary.errors,
        )
