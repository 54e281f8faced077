USERS_COLLECTION = "users"
POSTS_COLLECTION = "posts"
COMMENTS_COLLECTION = "comments"
VOTES_COLLECTION = "votes"

ACTIVITY_OWNER_FIELD = "userId"

# Single slot holding the whole public account listing
USERS_CACHE_KEY = "users"
USERS_CACHE_TTL = 60 * 60  # 1 hour

# Fields that never leave the service
SENSITIVE_ACCOUNT_FIELDS: frozenset[str] = frozenset({"password"})
