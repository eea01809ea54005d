"""Sanitized snapshot projection and prompt for the advice assistant"""

import json
from decimal import Decimal
from typing import Any, Dict

from finance_tracker.domain.models import FinancialData


def build_advice_payload(data: FinancialData) -> Dict[str, Any]:
    """
    Project the snapshot down to what the assistant may see.

    No ids, dates or paid flags leave the process: only descriptions,
    amounts and per-purchase installment figures.
    """
    return {
        "income": [
            {"description": i.description, "amount": float(i.amount)} for i in data.income
        ],
        "fixedExpenses": [
            {"description": e.description, "amount": float(e.amount)}
            for e in data.fixed_expenses
        ],
        "creditCardPurchases": [
            {
                "card": card.name,
                "item": purchase.item,
                "store": purchase.store,
                "totalInstallments": purchase.total_installments,
                "installmentValue": float(
                    purchase.installments[0].amount if purchase.installments else Decimal("0")
                ),
            }
            for card in data.cards
            for purchase in card.purchases
        ],
    }


def build_advice_prompt(data: FinancialData, question: str) -> str:
    payload = json.dumps(build_advice_payload(data), indent=2, ensure_ascii=False)
    return (
        "Você é um assistente financeiro prestativo e amigável. Analise os seguintes dados "
        "financeiros e responda à pergunta do usuário. Forneça conselhos concisos e práticos. "
        "Não forneça conselhos de investimento profissional.\n\n"
        f"Dados Financeiros:\n{payload}\n\n"
        f'Pergunta do usuário:\n"{question}"\n\n'
        "Sua resposta (em português):"
    )
