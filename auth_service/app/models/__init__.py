# Import all models to ensure they are registered with SQLAlchemy
from shared.models.users import Users
from shared.models.user_login_session import UserLoginSession
