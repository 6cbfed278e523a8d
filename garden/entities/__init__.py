"""Garden entities: flowers, their genomes, and drawn stems."""

from garden.entities.flower import Flower, FlowerGenome
from garden.entities.stem import Leaf, LeafSide, Stem

__all__ = ["Flower", "FlowerGenome", "Leaf", "LeafSide", "Stem"]
