from miniminer.utils import encode_payload, freeze_data, get_raw_hash


class Block:
    def __init__(self, data, nonce: int = None):
        self.data = freeze_data(data)

        self.nonce = nonce

    def get_payload(self, nonce: int = None) -> str:
        if nonce is None:
            nonce = self.nonce

        if nonce is None:
            raise ValueError("Nonce must be defined to build the payload")

        return encode_payload(self.data, nonce)

    def get_hash(self, nonce: int = None) -> str:
        return get_raw_hash(self.get_payload(nonce))

    def to_dict(self) -> dict:
        return {
            "nonce": self.nonce,
            "data": [list(entry) for entry in self.data],
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(data=data["data"], nonce=data.get("nonce"))

    def __repr__(self) -> str:
        return f"Block(data={list(self.data)!r}, nonce={self.nonce!r})"
