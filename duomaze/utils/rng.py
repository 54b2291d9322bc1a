"""Seeded randomness for maze carving and role-wall placement."""

import random


class GameRNG:
    """The single source of randomness for maze generation.

    One instance is shared by every round of a session, so a seed fixes the
    whole Easy, Medium, Hard sequence of mazes, not just the first one.
    """

    def __init__(self, seed: int):
        """Create the generator.

        Args:
            seed: Session seed; equal seeds carve equal mazes
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Pick a coordinate component in ``[a, b]``, both ends included.

        Used to sample interior cells when scattering role walls.
        """
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Pick one uncarved neighbour (or any item) from a non-empty sequence."""
        return self.rng.choice(seq)

    def coin_flip(self) -> bool:
        """Decide which role a new role wall belongs to: True for A."""
        return self.rng.random() < 0.5
