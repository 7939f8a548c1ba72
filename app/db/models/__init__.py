from app.db.models.user import UserEntity

__all__ = ["UserEntity"]
