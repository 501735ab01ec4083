from reelnote.models.credential import UserTokenRecord

__all__ = ["UserTokenRecord"]
