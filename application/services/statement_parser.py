import logging
from decimal import Decimal, InvalidOperation

from application.utils.dates import parse_date
from domain.exceptions.conversion import StatementParseError
from domain.models.statement import Document, Transaction, normalize_currency
from infrastructure.classifier.openai_classifier import ColumnClassifier

logger = logging.getLogger(__name__)

STATEMENT_COLUMNS = {
	'date': 'The date of the transaction',
	'amount': 'The monetary amount of the transaction',
	'currency': 'The currency the transaction was performed in',
	'description': 'The description of the transaction',
}


class StatementParser:
	def __init__(self, classifier: ColumnClassifier):
		self.classifier = classifier

	def parse(self, rows: list[list[str]]) -> Document:
		content = ''.join(','.join(row) + '\n' for row in rows)
		indices = self.classifier.find_columns(STATEMENT_COLUMNS, content)
		negative = {name: index for name, index in indices.items() if index < 0}
		if negative:
			raise StatementParseError(f'classifier returned negative column indices {negative}')

		transactions = []
		for line_number, row in enumerate(rows, start=1):
			try:
				cells = {name: row[indices[name]].strip() for name in STATEMENT_COLUMNS}
			except IndexError as e:
				raise StatementParseError(f'row {line_number} has no column for {indices}') from e

			try:
				day = parse_date(cells['date'])
			except ValueError as e:
				logger.info(f'Skipping row {line_number}: {e}')
				continue

			try:
				amount = Decimal(cells['amount'])
				if not amount.is_finite():
					raise InvalidOperation(cells['amount'])
			except InvalidOperation as e:
				raise StatementParseError(
					f'failed to parse amount {cells["amount"]!r} on row {line_number}'
				) from e

			transactions.append(
				Transaction(
					description=cells['description'],
					date=day,
					amount=amount,
					currency=normalize_currency(cells['currency']),
				)
			)

		logger.info(f'Parsed {len(transactions)} transactions from {len(rows)} rows')
		return Document(transactions)
