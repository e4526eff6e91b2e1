from fastapi import Header


async def get_user_id(x_user_id: str = Header(min_length=1)) -> str:
    """Caller identity, as resolved by the auth layer in front of this service."""
    return x_user_id
