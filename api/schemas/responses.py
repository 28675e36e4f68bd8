import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from domain.models.statement import ConversionResult, Document


class TransactionResponse(BaseModel):
	description: str
	date: datetime.date
	amount: Decimal
	currency: str


class ConversionSummary(BaseModel):
	total: int = Field(..., description='Transactions received')
	succeeded: int = Field(..., description='Transactions converted')
	failed: int = Field(..., description='Transactions that could not be converted')


def _transactions(document: Document) -> list[TransactionResponse]:
	return [
		TransactionResponse(
			description=t.description, date=t.date, amount=t.amount, currency=t.currency
		)
		for t in document
	]


class StatementConversionResponse(BaseModel):
	target_currency: str = Field(..., description='Currency every converted amount is expressed in')
	converted: list[TransactionResponse]
	failed: list[TransactionResponse]
	summary: ConversionSummary

	@classmethod
	def from_result(cls, target_currency: str, result: ConversionResult) -> 'StatementConversionResponse':
		return cls(
			target_currency=target_currency,
			converted=_transactions(result.converted),
			failed=_transactions(result.failed),
			summary=ConversionSummary(
				total=result.total,
				succeeded=len(result.converted),
				failed=len(result.failed),
			),
		)


class ConversionFailedResponse(BaseModel):
	detail: str
	failed: list[TransactionResponse]

	@classmethod
	def from_document(cls, detail: str, failed: Document) -> 'ConversionFailedResponse':
		return cls(detail=detail, failed=_transactions(failed))
