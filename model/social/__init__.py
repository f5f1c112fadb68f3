from model.social.models import Post, PostComment, PostLike  # noqa: F401
from model.social.enum import NotificationType  # noqa: F401
