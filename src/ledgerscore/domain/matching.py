"""Matching-group reconciliation.

Rows sharing a matching key form one reconciliation unit. A group whose rows
net to (almost) zero is closed. An open group shows its whole net on exactly
one "residual holder" row: the row named by an override pair if there is
one, otherwise the row with the largest debit (the first one on ties).

Every view that needs open balances (open items, aging, monthly breakdown,
the Net-Only export) goes through MatchingResolver so they always agree on
which row carries the residual.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Sequence

from ledgerscore.domain.entities import (
    BALANCE_TOLERANCE,
    ZERO,
    LedgerRow,
    MatchingGroup,
    OpenItem,
    OverridePair,
)

logger = logging.getLogger(__name__)


class MatchingResolver:
    """Resolves residual holders for the rows of a single customer."""

    def __init__(self, override_pairs: Iterable[OverridePair] = ()):
        """Initialize matching resolver.

        Args:
            override_pairs: Pairs forcing the residual holder of a group
        """
        self.override_pairs = tuple(override_pairs)

    def groups(self, rows: Sequence[LedgerRow]) -> list[MatchingGroup]:
        """Build the matching groups of a customer's rows.

        Groups come out in order of their first row. Rows without a matching
        key belong to no group.
        """
        members: dict[str, list[int]] = {}
        for index, row in enumerate(rows):
            key = row.matching_key
            if key:
                members.setdefault(key, []).append(index)

        result = []
        for key, indices in members.items():
            net = sum((rows[i].net_amount for i in indices), ZERO)
            holder_index = None
            if abs(net) > BALANCE_TOLERANCE:
                holder_index = self.select_holder(rows, indices)
            result.append(
                MatchingGroup(
                    key=key,
                    row_indices=tuple(indices),
                    net=net,
                    holder_index=holder_index,
                )
            )

        logger.debug(
            "Resolved %d matching groups (%d open) over %d rows",
            len(result),
            sum(1 for group in result if not group.is_closed),
            len(rows),
        )
        return result

    def select_holder(self, rows: Sequence[LedgerRow], indices: Sequence[int]) -> int:
        """Pick the row that carries an open group's residual."""
        for index in indices:
            if any(pair.matches(rows[index]) for pair in self.override_pairs):
                return index

        # Strictly greater keeps the first row on equal debits
        holder = indices[0]
        for index in indices[1:]:
            if rows[index].debit > rows[holder].debit:
                holder = index
        return holder

    def resolve(self, rows: Sequence[LedgerRow]) -> dict[int, Decimal]:
        """Map each residual holder's row index to its group's net.

        Rows absent from the result carry no residual: members of closed
        groups, non-holder members of open groups and unmatched rows.
        """
        return {
            group.holder_index: group.net
            for group in self.groups(rows)
            if group.holder_index is not None
        }

    def open_items(self, rows: Sequence[LedgerRow]) -> list[OpenItem]:
        """List the open items of a customer in row order."""
        residuals = self.resolve(rows)
        items = []
        for index, row in enumerate(rows):
            if not row.matching_key:
                if abs(row.net_amount) > BALANCE_TOLERANCE:
                    items.append(OpenItem(row_index=index, row=row, amount=row.net_amount))
            elif index in residuals:
                items.append(
                    OpenItem(
                        row_index=index,
                        row=row,
                        amount=residuals[index],
                        matching=row.matching_key,
                    )
                )
        return items

    def net_only_rows(self, rows: Sequence[LedgerRow]) -> list[LedgerRow]:
        """Reduce a customer's rows to the Net-Only export view.

        Unmatched rows are kept untouched. Each open group is condensed into
        its holder row with credit rewritten to debit - residual, so the
        row's own debit - credit equals the residual. Everything else drops
        out.
        """
        residuals = self.resolve(rows)
        result = []
        for index, row in enumerate(rows):
            if not row.matching_key:
                result.append(row)
            elif index in residuals:
                result.append(replace(row, credit=row.debit - residuals[index]))
        return result

    def has_open_matchings(self, rows: Sequence[LedgerRow]) -> bool:
        return any(not group.is_closed for group in self.groups(rows))
