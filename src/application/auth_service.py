"""
Auth Service Module

Staff self-registration and login against the staffAccounts collection,
and admin login against the configured credential record.

Passwords are stored and compared as plaintext. This reproduces the
existing behaviour and is a known security gap, not an oversight.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from config.config_manager import AdminCredentials
from domain.staff_roster import StaffRoster
from infrastructure.document_store import DocumentStore, StoreError
from infrastructure.logger import get_logger

logger = get_logger("AuthService")

ACCOUNTS = "staffAccounts"


@dataclass
class StaffAccount:
    """Stored credential record of a staff member."""
    staff_id: str
    password: str
    created_at: str
    last_login: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "staffId": self.staff_id,
            "password": self.password,
            "createdAt": self.created_at,
        }
        if self.last_login is not None:
            data["lastLogin"] = self.last_login
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaffAccount":
        return cls(
            staff_id=data["staffId"],
            password=data["password"],
            created_at=data.get("createdAt", ""),
            last_login=data.get("lastLogin"),
        )


class AccountStore:
    """Account records keyed by staff id, kept in a document store."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def put_account(self, staff_id: str, account: StaffAccount) -> None:
        self.store.put_document(ACCOUNTS, staff_id, account.to_dict())

    def get_account(self, staff_id: str) -> Optional[StaffAccount]:
        data = self.store.get_document(ACCOUNTS, staff_id)
        if data is None:
            return None
        return StaffAccount.from_dict(data)


class AuthService:
    """
    Registration and login. Every method returns a bool and never raises;
    store failures are logged and reported as False.
    """

    def __init__(
        self,
        accounts: AccountStore,
        admin: Optional[AdminCredentials] = None,
        roster: Optional[StaffRoster] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.accounts = accounts
        self.admin = admin or AdminCredentials()
        self.roster = roster
        self.clock = clock or datetime.now

    def admin_login(self, username: str, password: str) -> bool:
        """Check admin credentials."""
        return username == self.admin.username and password == self.admin.password

    def register_staff(
        self,
        staff_id: str,
        password: str,
        confirm_password: Optional[str] = None
    ) -> bool:
        """
        Create an account for a staff member.

        Fails when the passwords do not match, the id is not on the roster,
        or an account already exists.
        """
        if confirm_password is not None and password != confirm_password:
            return False
        if not staff_id or not password:
            return False
        if self.roster is not None and self.roster.get_staff_by_id(staff_id) is None:
            logger.warning(f"Registration for unknown staff id {staff_id}")
            return False

        try:
            if self.accounts.get_account(staff_id) is not None:
                return False
            account = StaffAccount(
                staff_id=staff_id,
                password=password,
                created_at=self.clock().isoformat(),
            )
            self.accounts.put_account(staff_id, account)
        except (StoreError, KeyError) as e:
            logger.error(f"Error registering staff {staff_id}: {e}")
            return False

        logger.info(f"Registered staff account {staff_id}")
        return True

    def login_staff(self, staff_id: str, password: str) -> bool:
        """Verify a staff login and stamp lastLogin."""
        try:
            account = self.accounts.get_account(staff_id)
            if account is None:
                return False
            if account.password != password:
                return False

            account.last_login = self.clock().isoformat()
            self.accounts.put_account(staff_id, account)
        except (StoreError, KeyError) as e:
            logger.error(f"Error logging in staff {staff_id}: {e}")
            return False

        logger.info(f"Staff {staff_id} logged in")
        return True

    def account_exists(self, staff_id: str) -> bool:
        try:
            return self.accounts.get_account(staff_id) is not None
        except (StoreError, KeyError) as e:
            logger.error(f"Error getting staff account {staff_id}: {e}")
            return False
