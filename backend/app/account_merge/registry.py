"""Declarative tables of the columns rewritten when two accounts are merged.

Every foreign key that points at a collective (or at the user behind an
individual collective) must appear here. A missing entry is not an error at
runtime: the rows simply keep pointing at the retired account. Adding a new
owned model therefore means adding one line below plus a fixture in the
merge tests.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import InstrumentedAttribute

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
    Notification,
    Order,
    PaymentMethod,
    PayoutMethod,
    PaypalProduct,
    RequiredLegalDocument,
    Tier,
    Transaction,
    Update,
    VirtualCard,
)
from app.models.base import Base


@dataclass(frozen=True, slots=True)
class MovableField:
    """One (category, model, column) triple to reassign during a merge."""

    name: str
    model: type[Base]
    field: str

    @property
    def column(self) -> InstrumentedAttribute:
        return getattr(self.model, self.field)

    @property
    def id_column(self) -> InstrumentedAttribute:
        return getattr(self.model, "id")


# Category names are the keys stored in migration log payloads; keep them stable.
ACCOUNT_FIELDS: tuple[MovableField, ...] = (
    MovableField("activities", Activity, "collective_id"),
    MovableField("applications", Application, "collective_id"),
    MovableField("childrenCollectives", Collective, "parent_collective_id"),
    MovableField("comments", Comment, "collective_id"),
    MovableField("commentsCreated", Comment, "from_collective_id"),
    MovableField("connectedAccounts", ConnectedAccount, "collective_id"),
    MovableField("conversations", Conversation, "collective_id"),
    MovableField("conversationsCreated", Conversation, "from_collective_id"),
    MovableField("creditTransactions", Transaction, "from_collective_id"),
    MovableField("debitTransactions", Transaction, "collective_id"),
    MovableField("emojiReactions", EmojiReaction, "from_collective_id"),
    MovableField("expenses", Expense, "collective_id"),
    MovableField("expensesCreated", Expense, "from_collective_id"),
    MovableField("giftCardTransactions", Transaction, "using_gift_card_from_collective_id"),
    MovableField("hostApplications", HostApplication, "host_collective_id"),
    MovableField("hostApplicationsCreated", HostApplication, "collective_id"),
    MovableField("hostedCollectives", Collective, "host_collective_id"),
    MovableField("legalDocuments", LegalDocument, "collective_id"),
    MovableField("memberInvitations", MemberInvitation, "member_collective_id"),
    MovableField("members", Member, "member_collective_id"),
    MovableField("membershipInvitations", MemberInvitation, "collective_id"),
    MovableField("memberships", Member, "collective_id"),
    MovableField("notifications", Notification, "collective_id"),
    MovableField("ordersCreated", Order, "from_collective_id"),
    MovableField("ordersReceived", Order, "collective_id"),
    MovableField("paymentMethods", PaymentMethod, "collective_id"),
    MovableField("payoutMethods", PayoutMethod, "collective_id"),
    MovableField("paypalProducts", PaypalProduct, "collective_id"),
    MovableField("requiredLegalDocuments", RequiredLegalDocument, "host_collective_id"),
    MovableField("tiers", Tier, "collective_id"),
    MovableField("updates", Update, "collective_id"),
    MovableField("updatesCreated", Update, "from_collective_id"),
    MovableField("virtualCards", VirtualCard, "collective_id"),
    MovableField("virtualCardsHosted", VirtualCard, "host_collective_id"),
)

USER_FIELDS: tuple[MovableField, ...] = (
    MovableField("activities", Activity, "user_id"),
    MovableField("applications", Application, "created_by_user_id"),
    MovableField("collectives", Collective, "created_by_user_id"),
    MovableField("comments", Comment, "created_by_user_id"),
    MovableField("conversationFollowers", ConversationFollower, "user_id"),
    MovableField("conversations", Conversation, "created_by_user_id"),
    MovableField("emojiReactions", EmojiReaction, "user_id"),
    MovableField("expenseAttachedFiles", ExpenseAttachedFile, "created_by_user_id"),
    MovableField("expenseItems", ExpenseItem, "created_by_user_id"),
    MovableField("expenses", Expense, "user_id"),
    MovableField("memberInvitations", MemberInvitation, "created_by_user_id"),
    MovableField("members", Member, "created_by_user_id"),
    MovableField("migrationLogs", MigrationLog, "created_by_user_id"),
    MovableField("notifications", Notification, "user_id"),
    MovableField("orders", Order, "created_by_user_id"),
    MovableField("paymentMethods", PaymentMethod, "created_by_user_id"),
    MovableField("payoutMethods", PayoutMethod, "created_by_user_id"),
    MovableField("transactions", Transaction, "created_by_user_id"),
    MovableField("updates", Update, "created_by_user_id"),
    MovableField("virtualCards", VirtualCard, "user_id"),
)
