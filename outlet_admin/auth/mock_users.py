APP_VERSION = "1.0.0"

# Demo accounts; nothing here is validated beyond a plain password match.
MOCK_USERS = {
    "admin@example.com": {
        "password": "password",
        "user": {
            "id": "1",
            "email": "admin@example.com",
            "name": "Admin User",
            "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=admin",
            "modules": ["hotel", "restaurant", "travel"],
            "outlets": [
                {"id": "h1", "name": "Grand Hotel", "type": "hotel"},
                {"id": "h2", "name": "Beach Resort", "type": "hotel"},
                {"id": "r1", "name": "Italian Kitchen", "type": "restaurant"},
                {"id": "t1", "name": "Adventure Tours", "type": "travel"},
            ],
            "currentOutletId": "h1",
        },
    },
    "hotel@example.com": {
        "password": "password",
        "user": {
            "id": "2",
            "email": "hotel@example.com",
            "name": "Hotel Manager",
            "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=hotel",
            "modules": ["hotel"],
            "outlets": [{"id": "h3", "name": "City Hotel", "type": "hotel"}],
            "currentOutletId": "h3",
        },
    },
    "superstar@mistnove.com": {
        "password": "admin1234",
        "user": {
            "id": "3",
            "email": "superstar@mistnove.com",
            "name": "Super Admin",
            "avatar": "https://api.dicebear.com/7.x/avataaars/svg?seed=superstar",
            "modules": ["hotel", "restaurant", "travel"],
            "outlets": [
                {"id": "h1", "name": "Grand Hotel", "type": "hotel"},
                {"id": "h2", "name": "Beach Resort", "type": "hotel"},
                {"id": "r1", "name": "Italian Kitchen", "type": "restaurant"},
                {"id": "t1", "name": "Adventure Tours", "type": "travel"},
            ],
            "currentOutletId": "h1",
        },
    },
}

# /me and /my-outlets have no real session behind them and always answer for this account
DEFAULT_PROFILE_EMAIL = "superstar@mistnove.com"


class InvalidCredentials(Exception):
    pass


def login_user(email: str, password: str) -> dict:
    account = MOCK_USERS.get(email)
    if account is None or account["password"] != password:
        raise InvalidCredentials("Invalid credentials")
    return account["user"]


def current_user() -> dict:
    return MOCK_USERS[DEFAULT_PROFILE_EMAIL]["user"]
