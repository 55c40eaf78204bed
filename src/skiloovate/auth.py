"""Local account management: sign up, log in, and the current-user marker."""
import hashlib
import logging
import secrets
import uuid
from datetime import datetime

from skiloovate.db import delete_setting, get_connection, get_setting, set_setting
from skiloovate.models import User

logger = logging.getLogger(__name__)

CURRENT_USER_KEY = "current_user_id"
HASH_ITERATIONS = 120_000


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), HASH_ITERATIONS)
    return digest.hex()


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        course=row["course"] or "",
        enrollment_date=row["enrollment_date"],
        tests_completed=row["tests_completed"],
        average_score=row["average_score"],
    )


def get_user(db_path: str, user_id: str) -> User | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    conn.close()
    return _row_to_user(row) if row else None


def signup(db_path: str, email: str, password: str, name: str, course: str = "") -> User | None:
    """Create an account and log it in. Returns None if the email is taken."""
    email = email.strip().lower()
    if not email or not password or not name.strip():
        raise ValueError("email, password and name are required")
    conn = get_connection(db_path)
    existing = conn.execute("SELECT id FROM users WHERE email = ?", (email,)).fetchone()
    if existing:
        conn.close()
        logger.info("Signup rejected, email already registered: %s", email)
        return None
    user_id = uuid.uuid4().hex
    salt = secrets.token_hex(16)
    conn.execute(
        """INSERT INTO users (id, email, name, course, password_hash, salt, enrollment_date)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (user_id, email, name.strip(), course, hash_password(password, salt), salt, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    set_setting(db_path, CURRENT_USER_KEY, user_id)
    logger.info("Created user %s", user_id)
    return get_user(db_path, user_id)


def login(db_path: str, email: str, password: str) -> User | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM users WHERE email = ?", (email.strip().lower(),)).fetchone()
    conn.close()
    if not row or not secrets.compare_digest(row["password_hash"], hash_password(password, row["salt"])):
        logger.info("Failed login for %s", email)
        return None
    set_setting(db_path, CURRENT_USER_KEY, row["id"])
    logger.info("User %s logged in", row["id"])
    return _row_to_user(row)


def logout(db_path: str) -> None:
    delete_setting(db_path, CURRENT_USER_KEY)


def get_current_user(db_path: str) -> User | None:
    user_id = get_setting(db_path, CURRENT_USER_KEY)
    if user_id is None:
        return None
    return get_user(db_path, user_id)
