from .user import User
from .account import Account, ACCOUNT_TYPES
from .category import Category, CATEGORY_TYPES
from .transaction import Transaction
