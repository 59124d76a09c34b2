import uuid


def generate_public_id():
    return uuid.uuid4().hex[:12]
