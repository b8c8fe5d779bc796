from navigation.utils.enums import Face


class Obstacle:
    """A permanently blocked cell on one face of the cube."""

    __slots__ = ("face", "x", "y")

    def __init__(self, face: Face, x: int, y: int):
        self.face = Face(face)
        self.x = x
        self.y = y

    def key(self) -> tuple:
        return self.face, self.x, self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Obstacle):
            return False
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __repr__(self) -> str:
        return f"Obstacle(face={self.face.name}, x={self.x}, y={self.y})"

    def get_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {"face": self.face.name, "x": self.x, "y": self.y}
