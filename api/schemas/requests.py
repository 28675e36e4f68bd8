import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.statement import Transaction


class TransactionRequest(BaseModel):
	description: str = ''
	date: datetime.date
	amount: Decimal
	currency: str = Field(..., min_length=3, max_length=3)

	@field_validator('currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	def to_domain(self) -> Transaction:
		return Transaction(
			description=self.description,
			date=self.date,
			amount=self.amount,
			currency=self.currency,
		)


class StatementConversionRequest(BaseModel):
	target_currency: str = Field(..., min_length=3, max_length=3)
	transactions: list[TransactionRequest]

	@field_validator('target_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'target_currency': 'EUR',
				'transactions': [
					{'description': 'Coffee', 'date': '2025-01-01', 'amount': -45.50, 'currency': 'SEK'}
				],
			}
		}
	)
