"""ORM models package exports."""

from app.models.activity import Activity
from app.models.application import Application
from app.models.collective import Collective
from app.models.comment import Comment
from app.models.connected_account import ConnectedAccount
from app.models.conversation import Conversation
from app.models.conversation_follower import ConversationFollower
from app.models.emoji_reaction import EmojiReaction
from app.models.expense import Expense
from app.models.expense_attached_file import ExpenseAttachedFile
from app.models.expense_item import ExpenseItem
from app.models.host_application import HostApplication
from app.models.legal_document import LegalDocument
from app.models.member import Member
from app.models.member_invitation import MemberInvitation
from app.models.migration_log import MigrationLog, MigrationLogType
from app.models.notification import Notification
from app.models.order import Order
from app.models.payment_method import PaymentMethod
from app.models.payout_method import PayoutMethod
from app.models.paypal_product import PaypalProduct
from app.models.required_legal_document import RequiredLegalDocument
from app.models.tier import Tier
from app.models.transaction import Transaction
from app.models.update import Update
from app.models.user import User
from app.models.virtual_card import VirtualCard

__all__ = [
    "Activity",
    "Application",
    "Collective",
    "Comment",
    "ConnectedAccount",
    "Conversation",
    "ConversationFollower",
    "EmojiReaction",
    "Expense",
    "ExpenseAttachedFile",
    "ExpenseItem",
    "HostApplication",
    "LegalDocument",
    "Member",
    "MemberInvitation",
    "MigrationLog",
    "MigrationLogType",
    "Notification",
    "Order",
    "PaymentMethod",
    "PayoutMethod",
    "PaypalProduct",
    "RequiredLegalDocument",
    "Tier",
    "Transaction",
    "Update",
    "User",
    "VirtualCard",
]
