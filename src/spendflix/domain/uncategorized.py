"""Grouping of uncategorized transactions for batch review."""

from spendflix.database.base import Database
from spendflix.domain.categorizer import sanitize_description
from spendflix.domain.entities import UncategorizedGroup, UncategorizedSummary


class UncategorizedGrouper:
    """Summarizes what a user still has to categorize."""

    def __init__(self, db: Database):
        self.db = db

    def summarize(self, user_id: int) -> UncategorizedSummary:
        """Count categorized transactions and group the rest by description.

        Transactions whose descriptions sanitize to the same text land in one
        group, so a recurring merchant can be categorized in one step. Groups
        are ordered largest first, then by key.

        Args:
            user_id: Owner whose accounts are summarized

        Returns:
            UncategorizedSummary; categorized_percent is 1.0 when the user has
            no transactions at all
        """
        categorized, uncategorized = self.db.count_transactions_by_categorization(user_id)
        total = categorized + uncategorized
        percent = 1.0 - uncategorized / total if total else 1.0

        groups: dict[str, UncategorizedGroup] = {}
        for txn in self.db.list_transactions(user_id=user_id, uncategorized=True):
            key = sanitize_description(txn.description)
            group = groups.setdefault(key, UncategorizedGroup(key=key))
            group.ids.append(txn.id)
            group.descriptions.append(txn.description)
            group.values.append(txn.amount)

        ordered = sorted(groups.values(), key=lambda g: (-len(g.ids), g.key))
        return UncategorizedSummary(
            categorized_count=categorized,
            uncategorized_count=uncategorized,
            categorized_percent=percent,
            groups=ordered,
        )
