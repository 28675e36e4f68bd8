import logging

from application.services import Converter, ServiceFactory
from config.settings import get_settings

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	factory: ServiceFactory | None = None
	converter: Converter | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	deps.factory = ServiceFactory(get_settings())
	deps.converter = deps.factory.create_converter()
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.factory:
		await deps.factory.cleanup()
	deps.factory = None
	deps.converter = None

	logger.info('Cleanup complete')


def get_converter() -> Converter:
	if deps.converter is None:
		raise RuntimeError('Converter not initialized')
	return deps.converter


def get_provider_names() -> list[str]:
	if deps.factory is None:
		raise RuntimeError('Providers not initialized')
	return list(deps.factory.providers)
