import uuid


class User:
    def __init__(self, username, password, id=None):
        self.id = id or str(uuid.uuid4())
        self.username = username
        self.password = password

    def to_dict(self):
        return {"id": self.id, "username": self.username}
