"""Word-list codename generator.

Codenames take the form "The <Adjective> <Animal>", for example
"The Silent Falcon". Uniqueness is enforced by the database, not here.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable, Sequence

ADJECTIVES: tuple[str, ...] = (
    "Amber", "Ancient", "Arctic", "Ashen", "Bold", "Brave", "Bright", "Brisk",
    "Calm", "Clever", "Cobalt", "Crimson", "Crystal", "Cunning", "Daring",
    "Dark", "Dusky", "Eager", "Electric", "Emerald", "Fearless", "Fierce",
    "Fleet", "Frosty", "Gallant", "Ghostly", "Gilded", "Golden", "Grim",
    "Hidden", "Hollow", "Hushed", "Icy", "Indigo", "Iron", "Ivory", "Jade",
    "Keen", "Lone", "Lucky", "Lunar", "Mighty", "Misty", "Nimble", "Noble",
    "Obsidian", "Onyx", "Pale", "Phantom", "Quick", "Quiet", "Radiant",
    "Rapid", "Restless", "Rogue", "Royal", "Rusty", "Sable", "Scarlet",
    "Secret", "Shadow", "Sharp", "Silent", "Silver", "Sly", "Solar",
    "Steady", "Stealthy", "Stormy", "Swift", "Tawny", "Thunder", "Twilight",
    "Velvet", "Vigilant", "Violet", "Wandering", "Wild", "Wily", "Wise",
)

ANIMALS: tuple[str, ...] = (
    "Albatross", "Badger", "Barracuda", "Bat", "Bear", "Bison", "Boar",
    "Bobcat", "Buffalo", "Camel", "Caracal", "Cheetah", "Cobra", "Condor",
    "Cougar", "Coyote", "Crane", "Crow", "Dingo", "Dolphin", "Dragonfly",
    "Eagle", "Eel", "Elk", "Falcon", "Ferret", "Fox", "Gazelle", "Gecko",
    "Gorilla", "Griffin", "Hare", "Hawk", "Heron", "Hornet", "Hyena", "Ibis",
    "Jackal", "Jaguar", "Kestrel", "Kingfisher", "Koala", "Lemur", "Leopard",
    "Lion", "Lynx", "Magpie", "Mamba", "Mantis", "Marten", "Mongoose",
    "Moose", "Narwhal", "Ocelot", "Octopus", "Orca", "Osprey", "Otter",
    "Owl", "Panther", "Pelican", "Puma", "Python", "Raven", "Rhino",
    "Salamander", "Scorpion", "Shark", "Sparrow", "Stallion", "Stingray",
    "Swan", "Tiger", "Viper", "Vulture", "Walrus", "Weasel", "Wolf",
    "Wolverine", "Zebra",
)


class WordListCodenameGenerator:
    """Builds codenames from an adjective and an animal chosen at random."""

    def __init__(
        self,
        adjectives: Sequence[str] = ADJECTIVES,
        animals: Sequence[str] = ANIMALS,
        choice: Callable[[Sequence[str]], str] = secrets.choice,
    ):
        if not adjectives or not animals:
            raise ValueError("Codename word lists must not be empty")
        self._adjectives = adjectives
        self._animals = animals
        self._choice = choice

    def generate(self) -> str:
        return f"The {self._choice(self._adjectives)} {self._choice(self._animals)}"
