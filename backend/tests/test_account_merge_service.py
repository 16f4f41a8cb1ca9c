"""Service-level tests for account merge simulation and execution."""

from __future__ import annotations

import itertools
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.account_merge import (
    ACCOUNT_FIELDS,
    USER_FIELDS,
    IneligibleMergeError,
    MissingLinkedIdentityError,
    MovableField,
)
from app.models import (
    Activity,
    Application,
    Collective,
    Comment,
    ConnectedAccount,
    Conversation,
    ConversationFollower,
    EmojiReaction,
    Expense,
    ExpenseAttachedFile,
    ExpenseItem,
    HostApplication,
    LegalDocument,
    Member,
    MemberInvitation,
    MigrationLog,
    MigrationLogType,
    Notification,
    Order,
    PaymentMethod,
    PayoutMethod,
    PaypalProduct,
    RequiredLegalDocument,
    Tier,
    Transaction,
    Update,
    User,
    VirtualCard,
)
from app.models.base import Base
from app.schema.collective_types import DEFAULT_GUEST_NAME
from app.services.account_merge import (
    count_movable_items,
    count_movable_user_items,
    merge_accounts,
    simulate_merge_accounts,
)
from app.services.database import get_collective_by_slug, get_merged_into_id, list_migration_logs


class AccountMergeServiceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        self.db: Session = self.SessionLocal()
        self._reset_tables()
        self._sequence = itertools.count(1)

        # Noise: records of unrelated accounts must never move.
        self.counterparty = self._collective("COLLECTIVE", name="Counterparty")
        self.noise = self._collective("ORGANIZATION", name="Noise Corp")
        self._add_owned_records(self.noise, self.counterparty)
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def test_simulate_lists_non_zero_categories(self) -> None:
        source = self._collective("COLLECTIVE", slug="old-collective")
        destination = self._collective("COLLECTIVE", slug="new-collective")
        self.db.add_all(
            [
                Tier(name="Backer", collective_id=source.id),
                Tier(name="Sponsor", collective_id=source.id),
                Update(title="Hello", collective_id=source.id, from_collective_id=self.counterparty.id),
            ]
        )
        self.db.commit()

        summary = simulate_merge_accounts(self.db, source, destination)

        self.assertEqual(
            summary,
            "The profiles information will be merged.\n"
            "\n"
            "The following items will be moved to @new-collective:\n"
            "  - tiers: 2\n"
            "  - updates: 1\n"
            "\n",
        )

    def test_simulate_without_movable_items(self) -> None:
        source = self._collective("COLLECTIVE")
        destination = self._collective("COLLECTIVE")
        self.db.commit()

        self.assertEqual(
            simulate_merge_accounts(self.db, source, destination),
            "The profiles information will be merged.\n\n",
        )

    def test_simulate_does_not_write(self) -> None:
        source = self._collective("COLLECTIVE")
        destination = self._collective("COLLECTIVE")
        self._add_owned_records(source, self.counterparty)
        self.db.commit()
        before = self._snapshot()

        simulate_merge_accounts(self.db, source, destination)
        self.db.rollback()

        self.assertEqual(self._snapshot(), before)

    def test_simulate_reports_user_level_items(self) -> None:
        source, from_user = self._individual("alice")
        destination, _ = self._individual("alice-2")
        self.db.add(Expense(description="Travel", collective_id=self.counterparty.id, from_collective_id=self.counterparty.id, user_id=from_user.id))
        self.db.commit()

        summary = simulate_merge_accounts(self.db, source, destination)

        self.assertIn("The following user-level items will be reassigned:\n  - expenses: 1\n", summary)

    def test_count_movable_items_includes_every_category(self) -> None:
        source = self._collective("COLLECTIVE")
        self._add_owned_records(source, self.counterparty, times=2)
        self.db.commit()

        counts = count_movable_items(self.db, source)

        self.assertEqual(counts, {entry.name: 2 for entry in ACCOUNT_FIELDS})

    def test_merge_moves_every_owned_record(self) -> None:
        source = self._collective("COLLECTIVE", slug="bob")
        destination = self._collective("COLLECTIVE", slug="robert")
        self._add_owned_records(source, self.counterparty, times=2)
        self._add_owned_records(destination, self.counterparty)
        self.db.commit()
        destination_before = count_movable_items(self.db, destination)
        noise_before = count_movable_items(self.db, self.noise)
        counterparty_before = count_movable_items(self.db, self.counterparty)

        result = merge_accounts(self.db, source, destination)

        self.assertEqual(result.items_moved, 2 * len(ACCOUNT_FIELDS))
        self.assertEqual(result.user_items_moved, 0)
        self.assertEqual(count_movable_items(self.db, source), {entry.name: 0 for entry in ACCOUNT_FIELDS})
        destination_after = count_movable_items(self.db, destination)
        for entry in ACCOUNT_FIELDS:
            self.assertEqual(destination_after[entry.name], destination_before[entry.name] + 2, entry.name)
        self.assertEqual(count_movable_items(self.db, self.noise), noise_before)
        self.assertEqual(count_movable_items(self.db, self.counterparty), counterparty_before)

    def test_merge_retires_source_and_frees_slug(self) -> None:
        source = self._collective("COLLECTIVE", slug="bob", data={"legacy": True})
        destination = self._collective("COLLECTIVE", slug="robert")
        self.db.commit()

        merge_accounts(self.db, source, destination)

        self.assertIsNone(get_collective_by_slug(self.db, "bob"))
        retired = self.db.get(Collective, source.id)
        assert retired is not None
        self.assertIsNotNone(retired.deleted_at)
        self.assertEqual(retired.slug, "bob-merged")
        self.assertEqual(retired.data, {"legacy": True, "mergedIntoCollectiveId": destination.id})
        self.assertEqual(get_merged_into_id(retired), destination.id)
        self.assertEqual(get_collective_by_slug(self.db, "bob-merged", include_deleted=True).id, source.id)

        # The original slug can be claimed again.
        reclaimed = self._collective("COLLECTIVE", slug="bob")
        self.db.commit()
        self.assertEqual(get_collective_by_slug(self.db, "bob").id, reclaimed.id)

    def test_slug_stays_unique_among_active_accounts(self) -> None:
        self._collective("COLLECTIVE", slug="taken")
        self.db.commit()
        self.db.add(Collective(type="COLLECTIVE", slug="taken", data={}))
        with self.assertRaises(IntegrityError):
            self.db.commit()
        self.db.rollback()

    def test_merge_fills_placeholder_profile_fields(self) -> None:
        source = self._collective("COLLECTIVE", name="Alice", country_iso="FR", address="1 rue de Paris")
        destination = self._collective("COLLECTIVE", name="")
        self.db.commit()

        result = merge_accounts(self.db, source, destination)

        refreshed = self.db.get(Collective, destination.id)
        assert refreshed is not None
        self.assertEqual(refreshed.name, "Alice")
        self.assertEqual(refreshed.country_iso, "FR")
        self.assertEqual(refreshed.address, "1 rue de Paris")
        self.assertEqual(result.profile_fields_updated, ["address", "country_iso", "name"])

    def test_merge_keeps_real_destination_name(self) -> None:
        source = self._collective("COLLECTIVE", name="Alice")
        destination = self._collective("COLLECTIVE", name="Bob", country_iso="BE")
        self.db.commit()

        merge_accounts(self.db, source, destination)

        refreshed = self.db.get(Collective, destination.id)
        assert refreshed is not None
        self.assertEqual(refreshed.name, "Bob")
        self.assertEqual(refreshed.country_iso, "BE")

    def test_merge_rejects_self_merge_without_writing(self) -> None:
        account = self._collective("COLLECTIVE")
        self.db.commit()
        before = self._snapshot()

        with self.assertRaises(IneligibleMergeError):
            merge_accounts(self.db, account, account)

        self.assertEqual(self._snapshot(), before)

    def test_merge_rejects_type_mismatch(self) -> None:
        organization = self._collective("ORGANIZATION")
        individual, _ = self._individual("carol")
        self.db.commit()

        with self.assertRaises(IneligibleMergeError):
            merge_accounts(self.db, organization, individual)
        with self.assertRaises(IneligibleMergeError):
            simulate_merge_accounts(self.db, organization, individual)

    def test_merge_requires_linked_users_for_individuals(self) -> None:
        source = self._collective("USER", slug="orphan")
        destination, _ = self._individual("dave")
        self.db.commit()
        before = self._snapshot()

        with self.assertRaises(MissingLinkedIdentityError):
            merge_accounts(self.db, source, destination)

        self.assertEqual(self._snapshot(), before)

    def test_merge_migrates_linked_user(self) -> None:
        source, from_user = self._individual("erin")
        destination, into_user = self._individual("erin-work")
        expenses = [
            Expense(
                description=f"Expense {index}",
                collective_id=self.counterparty.id,
                from_collective_id=source.id,
                user_id=from_user.id,
            )
            for index in range(3)
        ]
        self.db.add_all(expenses)
        self._add_user_records(from_user)
        self.db.commit()
        user_counts_before = count_movable_user_items(self.db, from_user)

        result = merge_accounts(self.db, source, destination)

        for expense in expenses:
            refreshed = self.db.get(Expense, expense.id)
            assert refreshed is not None
            self.assertEqual(refreshed.user_id, into_user.id)
            self.assertEqual(refreshed.from_collective_id, destination.id)
        retired_user = self.db.get(User, from_user.id)
        assert retired_user is not None
        self.assertIsNotNone(retired_user.deleted_at)
        self.assertIsNone(self.db.get(User, into_user.id).deleted_at)
        self.assertEqual(count_movable_user_items(self.db, from_user), {entry.name: 0 for entry in USER_FIELDS})
        self.assertEqual(result.from_user_id, from_user.id)
        self.assertEqual(result.into_user_id, into_user.id)
        self.assertEqual(result.user_items_moved, sum(user_counts_before.values()))

        log = self.db.get(MigrationLog, result.migration_log_id)
        assert log is not None
        self.assertEqual(log.data["fromUser"], from_user.id)
        user_changes = log.data["userChanges"]
        self.assertEqual(sorted(user_changes), sorted(entry.name for entry in USER_FIELDS))
        self.assertTrue({expense.id for expense in expenses} <= set(user_changes["expenses"]))
        for entry in USER_FIELDS:
            self.assertEqual(len(user_changes[entry.name]), user_counts_before[entry.name], entry.name)

    def test_merge_writes_one_complete_audit_record(self) -> None:
        acting_user = self._individual("admin")[1]
        source = self._collective("COLLECTIVE", slug="src")
        destination = self._collective("COLLECTIVE", slug="dst")
        self._add_owned_records(source, self.counterparty, times=3)
        self.db.commit()
        estimate = count_movable_items(self.db, source)

        result = merge_accounts(self.db, source, destination, acting_user.id)

        logs = list_migration_logs(self.db, MigrationLogType.MERGE_ACCOUNTS)
        self.assertEqual(len(logs), 1)
        log = logs[0]
        self.assertEqual(log.id, result.migration_log_id)
        self.assertEqual(log.type, "MERGE_ACCOUNTS")
        self.assertEqual(log.description, "Merge src into dst")
        self.assertEqual(log.created_by_user_id, acting_user.id)
        self.assertEqual(log.data["fromAccount"], source.id)
        self.assertEqual(log.data["intoAccount"], destination.id)
        self.assertIsNone(log.data["fromUser"])
        self.assertNotIn("userChanges", log.data)
        for entry in ACCOUNT_FIELDS:
            self.assertEqual(len(log.data[entry.name]), estimate[entry.name], entry.name)

    def test_merge_rejects_retired_source(self) -> None:
        source = self._collective("COLLECTIVE", slug="a")
        first = self._collective("COLLECTIVE", slug="b")
        second = self._collective("COLLECTIVE", slug="c")
        self.db.commit()
        merge_accounts(self.db, source, first)
        before = self._snapshot()

        retired = self.db.get(Collective, source.id)
        with self.assertRaisesRegex(IneligibleMergeError, "does not exist"):
            merge_accounts(self.db, retired, second)
        with self.assertRaisesRegex(IneligibleMergeError, "does not exist"):
            simulate_merge_accounts(self.db, retired, second)

        self.assertEqual(self._snapshot(), before)

    def test_merge_rechecks_accounts_under_lock(self) -> None:
        source = self._collective("COLLECTIVE", slug="a")
        first = self._collective("COLLECTIVE", slug="b")
        second = self._collective("COLLECTIVE", slug="c")
        self.db.add(Tier(name="Backer", collective_id=second.id))
        self.db.commit()
        # Handles loaded before a concurrent merge retired `source`.
        stale_source = self._detached_copy(source)
        merge_accounts(self.db, source, first)
        before = self._snapshot()

        with self.assertLogs("app.services.account_merge", level="WARNING"):
            with self.assertRaisesRegex(IneligibleMergeError, "does not exist"):
                merge_accounts(self.db, stale_source, second)
        with self.assertRaises(IneligibleMergeError):
            merge_accounts(self.db, second, stale_source)

        self.assertEqual(self._snapshot(), before)
        self.assertEqual(len(list_migration_logs(self.db, MigrationLogType.MERGE_ACCOUNTS)), 1)
        retired = self.db.get(Collective, source.id)
        assert retired is not None
        self.assertEqual(retired.slug, "a-merged")
        self.assertEqual(get_merged_into_id(retired), first.id)

    def test_slug_lookup_keeps_case(self) -> None:
        account = self._collective("COLLECTIVE", slug="OpenSource")
        self.db.commit()

        self.assertEqual(get_collective_by_slug(self.db, " OpenSource ").id, account.id)
        self.assertIsNone(get_collective_by_slug(self.db, "opensource"))

    def test_failure_inside_transaction_rolls_everything_back(self) -> None:
        source, _ = self._individual("frank", name="Frank")
        destination, _ = self._individual("frank-2", name=DEFAULT_GUEST_NAME)
        self._add_owned_records(source, self.counterparty)
        self.db.commit()
        before = self._snapshot()

        with patch("app.services.account_merge.merged_slug", side_effect=RuntimeError("boom")):
            with self.assertLogs("app.services.account_merge", level="ERROR"):
                with self.assertRaises(RuntimeError):
                    merge_accounts(self.db, source, destination)

        self.assertEqual(self._snapshot(), before)
        self.assertEqual(list_migration_logs(self.db), [])

    def test_broken_registry_entry_rolls_back_earlier_updates(self) -> None:
        source = self._collective("COLLECTIVE")
        destination = self._collective("COLLECTIVE")
        self._add_owned_records(source, self.counterparty)
        self.db.commit()
        before = self._snapshot()
        broken_fields = ACCOUNT_FIELDS[:5] + (MovableField("broken", Tier, "missing_column"),)

        with self.assertLogs("app.services.account_merge", level="ERROR"):
            with self.assertRaises(AttributeError):
                merge_accounts(self.db, source, destination, account_fields=broken_fields)

        self.assertEqual(self._snapshot(), before)

    def _reset_tables(self) -> None:
        for table in reversed(Base.metadata.sorted_tables):
            self.db.execute(table.delete())
        self.db.commit()

    def _snapshot(self) -> dict[str, list[tuple]]:
        snapshot: dict[str, list[tuple]] = {}
        for table in Base.metadata.sorted_tables:
            rows = self.db.execute(select(table).order_by(table.c.id)).all()
            snapshot[table.name] = [tuple(row) for row in rows]
        return snapshot

    def _collective(self, collective_type: str, slug: str | None = None, **kwargs) -> Collective:
        number = next(self._sequence)
        kwargs.setdefault("data", {})
        collective = Collective(type=collective_type, slug=slug or f"account-{number}", **kwargs)
        self.db.add(collective)
        self.db.flush()
        return collective

    def _detached_copy(self, collective: Collective) -> Collective:
        return Collective(
            id=collective.id,
            type=collective.type,
            slug=collective.slug,
            name=collective.name,
            data=dict(collective.data or {}),
            parent_collective_id=collective.parent_collective_id,
            host_collective_id=collective.host_collective_id,
        )

    def _individual(self, slug: str, name: str | None = None) -> tuple[Collective, User]:
        collective = self._collective("USER", slug=slug, name=slug.title() if name is None else name)
        user = User(email=f"{slug}@example.com", collective_id=collective.id)
        self.db.add(user)
        self.db.flush()
        return collective, user

    def _add_owned_records(self, account: Collective, counterparty: Collective, times: int = 1) -> None:
        """Attach exactly `times` rows to `account` for every ACCOUNT_FIELDS category."""

        for _ in range(times):
            number = next(self._sequence)
            tier = Tier(name="Backer", amount=500, collective_id=account.id)
            comment = Comment(html="<p>Thanks!</p>", collective_id=account.id, from_collective_id=counterparty.id)
            self.db.add_all([tier, comment])
            self.db.flush()
            self.db.add_all(
                [
                    Activity(type="collective.updated", collective_id=account.id),
                    Application(name="Bot", collective_id=account.id),
                    Comment(html="<p>Hi</p>", collective_id=counterparty.id, from_collective_id=account.id),
                    ConnectedAccount(service="github", collective_id=account.id),
                    Conversation(title="Hello", collective_id=account.id, from_collective_id=counterparty.id),
                    Conversation(title="Hi", collective_id=counterparty.id, from_collective_id=account.id),
                    Transaction(kind="CREDIT", amount=100, collective_id=counterparty.id, from_collective_id=account.id),
                    Transaction(kind="DEBIT", amount=-100, collective_id=account.id, from_collective_id=counterparty.id),
                    Transaction(kind="CREDIT", amount=50, collective_id=counterparty.id, using_gift_card_from_collective_id=account.id),
                    EmojiReaction(emoji=":tada:", comment_id=comment.id, from_collective_id=account.id),
                    Expense(description="Hosting", collective_id=account.id, from_collective_id=counterparty.id),
                    Expense(description="Design", collective_id=counterparty.id, from_collective_id=account.id),
                    HostApplication(collective_id=counterparty.id, host_collective_id=account.id),
                    HostApplication(collective_id=account.id, host_collective_id=counterparty.id),
                    Collective(type="PROJECT", slug=f"child-{number}", parent_collective_id=account.id, data={}),
                    Collective(type="COLLECTIVE", slug=f"hosted-{number}", host_collective_id=account.id, data={}),
                    LegalDocument(year=2024, collective_id=account.id),
                    MemberInvitation(collective_id=counterparty.id, member_collective_id=account.id),
                    Member(collective_id=counterparty.id, member_collective_id=account.id, role="BACKER"),
                    MemberInvitation(collective_id=account.id, member_collective_id=counterparty.id),
                    Member(collective_id=account.id, member_collective_id=counterparty.id, role="ADMIN"),
                    Notification(type="collective.expense.created", collective_id=account.id),
                    Order(collective_id=counterparty.id, from_collective_id=account.id, total_amount=500),
                    Order(collective_id=account.id, from_collective_id=counterparty.id, total_amount=500),
                    PaymentMethod(name="Visa", collective_id=account.id),
                    PayoutMethod(type="BANK_ACCOUNT", collective_id=account.id),
                    PaypalProduct(paypal_product_id=f"PROD-{number}", collective_id=account.id, tier_id=tier.id),
                    RequiredLegalDocument(host_collective_id=account.id),
                    Update(title="News", collective_id=account.id, from_collective_id=counterparty.id),
                    Update(title="News", collective_id=counterparty.id, from_collective_id=account.id),
                    VirtualCard(name="Card", collective_id=account.id, host_collective_id=counterparty.id),
                    VirtualCard(name="Card", collective_id=counterparty.id, host_collective_id=account.id),
                ]
            )
            self.db.flush()

    def _add_user_records(self, user: User) -> None:
        """Attach one row authored by `user` for every USER_FIELDS category."""

        other = self.counterparty
        conversation = Conversation(title="Thread", collective_id=other.id, from_collective_id=other.id, created_by_user_id=user.id)
        expense = Expense(description="Receipt", collective_id=other.id, from_collective_id=other.id, user_id=user.id)
        self.db.add_all([conversation, expense])
        self.db.flush()
        self.db.add_all(
            [
                Activity(type="user.login", user_id=user.id),
                Application(name="CLI", created_by_user_id=user.id),
                Collective(type="COLLECTIVE", slug=f"created-by-{user.id}", created_by_user_id=user.id, data={}),
                Comment(html="<p>Noted</p>", collective_id=other.id, from_collective_id=other.id, created_by_user_id=user.id),
                ConversationFollower(conversation_id=conversation.id, user_id=user.id),
                EmojiReaction(emoji=":+1:", from_collective_id=other.id, user_id=user.id),
                ExpenseAttachedFile(url="https://example.com/receipt.pdf", expense_id=expense.id, created_by_user_id=user.id),
                ExpenseItem(description="Taxi", amount=1200, expense_id=expense.id, created_by_user_id=user.id),
                MemberInvitation(collective_id=other.id, member_collective_id=other.id, created_by_user_id=user.id),
                Member(collective_id=other.id, member_collective_id=other.id, created_by_user_id=user.id),
                MigrationLog(type="MANUAL", description="Backfill", created_by_user_id=user.id, data={}),
                Notification(type="user.digest", user_id=user.id),
                Order(collective_id=other.id, from_collective_id=other.id, created_by_user_id=user.id),
                PaymentMethod(name="Mastercard", created_by_user_id=user.id),
                PayoutMethod(type="PAYPAL", collective_id=other.id, created_by_user_id=user.id),
                Transaction(kind="CREDIT", amount=10, collective_id=other.id, created_by_user_id=user.id),
                Update(title="Status", collective_id=other.id, from_collective_id=other.id, created_by_user_id=user.id),
                VirtualCard(name="Team card", collective_id=other.id, host_collective_id=other.id, user_id=user.id),
            ]
        )
        self.db.flush()


if __name__ == "__main__":
    unittest.main()
