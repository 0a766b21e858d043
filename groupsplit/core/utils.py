import logging
from decimal import Decimal, ROUND_HALF_UP, getcontext
from typing import Dict, Iterable, List, NamedTuple, NewType, Sequence, Tuple

logger = logging.getLogger(__name__)

getcontext().prec = 28
CENTS = Decimal("0.01")
EPSILON = Decimal("0.01")

MemberId = NewType("MemberId", str)


class SimplifiedDebt(NamedTuple):
    from_id: MemberId
    to_id: MemberId
    amount: Decimal


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_balances(members: Iterable[MemberId], expenses) -> Dict[MemberId, Decimal]:
    """
    Fold an expense history into a net balance per member.

    Positive means the member is owed money, negative means they owe.
    Every declared member is present (starting at 0); ids that only show up
    in expenses are added when first seen.
    """
    balances: Dict[MemberId, Decimal] = {m: Decimal("0") for m in members}

    for expense in expenses:
        payer = expense.paid_by
        balances[payer] = balances.get(payer, Decimal("0")) + to_decimal(expense.amount)

        for split in expense.splits:
            balances[split.member_id] = (
                balances.get(split.member_id, Decimal("0")) - to_decimal(split.amount)
            )

    return balances


def simplify_debts(balances: Dict[MemberId, Decimal]) -> List[SimplifiedDebt]:
    """
    Greedy min-cash-flow matching.

    Debtors are walked most negative first, creditors most positive first.
    Anything within EPSILON of zero counts as settled.
    """
    debtors: List[List] = []
    creditors: List[List] = []

    for uid, bal in balances.items():
        bal = to_decimal(bal)
        if abs(bal) <= EPSILON:
            continue
        if bal < 0:
            debtors.append([uid, bal])
        else:
            creditors.append([uid, bal])

    # stable sorts: ties keep the mapping's order
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers: List[SimplifiedDebt] = []
    i = j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        settle = min(-debtor[1], creditor[1])

        if settle > EPSILON:
            transfers.append(SimplifiedDebt(debtor[0], creditor[0], settle))
            debtor[1] += settle
            creditor[1] -= settle

        if abs(debtor[1]) <= EPSILON:
            i += 1
        if abs(creditor[1]) <= EPSILON:
            j += 1

    logger.debug(
        "simplified %d debtors / %d creditors into %d transfers",
        len(debtors), len(creditors), len(transfers)
    )
    return transfers


def _spread_remainder(amount: Decimal, shares: List[Tuple[MemberId, Decimal]]):
    diff = amount - sum((s for _, s in shares), Decimal("0"))
    if diff != 0 and shares:
        largest = max(range(len(shares)), key=lambda k: shares[k][1])
        uid, share = shares[largest]
        shares[largest] = (uid, share + diff)
    return shares


def split_equally(amount, member_ids: Sequence[MemberId]) -> List[Tuple[MemberId, Decimal]]:
    """Equal shares rounded to cents; the rounding remainder lands on the first member."""
    if not member_ids:
        raise ValueError("Cannot split an expense between zero members")

    amount = to_decimal(amount)
    share = qround(amount / len(member_ids))
    return _spread_remainder(amount, [(uid, share) for uid in member_ids])


def split_by_percentage(amount, percentages: Sequence[Tuple[MemberId, Decimal]]) -> List[Tuple[MemberId, Decimal]]:
    if not percentages:
        raise ValueError("Cannot split an expense between zero members")

    total_pct = sum((to_decimal(p) for _, p in percentages), Decimal("0"))
    if abs(total_pct - Decimal("100")) > EPSILON:
        raise ValueError("Total percentage for selected members must be 100%")

    amount = to_decimal(amount)
    shares = [
        (uid, qround(amount * to_decimal(pct) / Decimal("100")))
        for uid, pct in percentages
    ]
    return _spread_remainder(amount, shares)
