import argparse
import asyncio
import logging
import sys
from pathlib import Path

from application.services import ServiceFactory, StatementParser
from config.settings import get_settings
from domain.exceptions.conversion import ConversionFailedError, CurrencyException
from domain.models.statement import ConversionResult, Document, normalize_currency
from infrastructure.classifier.openai_classifier import OpenAIColumnClassifier
from infrastructure.monitoring.logger import setup_logging
from infrastructure.statements.csv_statement import read_statement_rows, write_statement

logger = logging.getLogger(__name__)

RESULTS_BANNER = """
╔═══════════════════════════════════════════════════════╗
║                  CONVERSION RESULTS                   ║
╚═══════════════════════════════════════════════════════╝
"""


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="statement-converter",
        description="Convert every transaction of a bank statement CSV into one currency",
    )
    parser.add_argument("--statement", required=True, help="Path to CSV file of bank statement")
    parser.add_argument("--target-currency", default=settings.TARGET_CURRENCY, help="Target currency")
    parser.add_argument("--oai-key", default=settings.OPENAI_API_KEY, help="OpenAI API key")
    parser.add_argument(
        "--currencylayer-key",
        default=settings.CURRENCYLAYER_API_KEY,
        help="CurrencyLayer API key, enables the fallback provider",
    )
    parser.add_argument("--delimiter", default=",", help="CSV delimiter of the statement")
    parser.add_argument("--output-dir", default=".", help="Directory for the converted and failed CSV files")
    return parser


def render_summary(target_currency: str, total: int, result: ConversionResult, paths: list[Path]) -> str:
    succeeded, failed = len(result.converted), len(result.failed)
    headers = ["Total Transactions", "Total Processed", "Succeeded #", "Failed #"]
    values = [str(total), str(succeeded + failed), str(succeeded), str(failed)]
    widths = [max(len(h), len(v)) for h, v in zip(headers, values, strict=True)]

    lines = [RESULTS_BANNER, f"Target Currency: {target_currency}"]
    lines += [f"- {path}" for path in paths]
    lines.append("")
    lines.append(" | ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True)))
    lines.append("-+-".join("-" * w for w in widths))
    lines.append(" | ".join(v.ljust(w) for v, w in zip(values, widths, strict=True)))
    return "\n".join(lines)


async def _convert(factory: ServiceFactory, target_currency: str, document: Document, currencylayer_key: str):
    converter = factory.create_converter(currencylayer_key=currencylayer_key)
    try:
        return await converter.convert(target_currency, document)
    finally:
        await factory.cleanup()


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    statement_path = Path(args.statement)
    output_dir = Path(args.output_dir)
    target_currency = normalize_currency(args.target_currency)

    classifier = OpenAIColumnClassifier(
        api_key=args.oai_key,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL or None,
    )
    rows = read_statement_rows(statement_path, delimiter=args.delimiter)
    document = StatementParser(classifier).parse(rows)

    factory = ServiceFactory(settings)
    exit_code = 0
    try:
        result = asyncio.run(_convert(factory, target_currency, document, args.currencylayer_key))
    except ConversionFailedError as e:
        logger.error(f"Conversion failed: {e}")
        result = ConversionResult(converted=Document(), failed=e.failed, errors=list(e.errors))
        exit_code = 1

    output_dir.mkdir(parents=True, exist_ok=True)
    paths = [
        write_statement(result.converted, output_dir / f"converted_{statement_path.name}"),
        write_statement(result.failed, output_dir / f"failed_{statement_path.name}"),
    ]
    print(render_summary(target_currency, len(document), result, paths))
    return exit_code


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    try:
        return run(args)
    except CurrencyException as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
