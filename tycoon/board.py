from typing import Dict, List, Optional

from tycoon.config import GameConfig, PropertyData

BOARD_SIZE = 40

STANDARD_PROPERTIES: Dict[int, str] = {
    1: "Mediterranean Avenue",
    3: "Baltic Avenue",
    5: "Reading Railroad",
    6: "Oriental Avenue",
    8: "Vermont Avenue",
    9: "Connecticut Avenue",
    11: "St. Charles Place",
    13: "States Avenue",
    14: "Virginia Avenue",
    16: "St. James Place",
    18: "Tennessee Avenue",
    19: "New York Avenue",
    21: "Kentucky Avenue",
    23: "Indiana Avenue",
    24: "Illinois Avenue",
    26: "Atlantic Avenue",
    27: "Ventnor Avenue",
    29: "Marvin Gardens",
    31: "Pacific Avenue",
    32: "North Carolina Avenue",
    34: "Pennsylvania Avenue",
    37: "Park Place",
    39: "Boardwalk",
}


class Board:
    """The cyclic track of 40 positions, some of which hold properties."""

    def __init__(self, config: Optional[GameConfig] = None, layout: Optional[Dict[int, str]] = None):
        config = config or GameConfig()
        layout = STANDARD_PROPERTIES if layout is None else layout
        self.size = BOARD_SIZE
        self._by_position: Dict[int, PropertyData] = {}
        self._by_name: Dict[str, PropertyData] = {}

        for position, name in sorted(layout.items()):
            if not 0 <= position < self.size:
                raise ValueError(f"Position {position} is off the board")
            if name in self._by_name:
                raise ValueError(f"Property {name} appears twice on the board")
            prop = PropertyData(name, position, config.base_rent, config.rent_multiplier)
            self._by_position[position] = prop
            self._by_name[name] = prop

    def property_at(self, position: int) -> Optional[str]:
        """Get the property name at the given position, or None."""
        prop = self._by_position.get(position % self.size)
        return prop.name if prop else None

    def advance(self, position: int, roll: int) -> int:
        """Move forward by a die roll, wrapping around the track."""
        if roll <= 0:
            raise ValueError(f"Roll must be positive, got {roll}")
        return (position + roll) % self.size

    def get_property(self, name: str) -> PropertyData:
        """Get property data by name."""
        return self._by_name[name]

    def has_property(self, name: str) -> bool:
        return name in self._by_name

    def position_of(self, name: str) -> int:
        return self._by_name[name].position

    def property_names(self) -> List[str]:
        """All property names in board order."""
        return [p.name for _, p in sorted(self._by_position.items())]
