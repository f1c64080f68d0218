from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Tuple

from .tree import DecisionTree, EdgeTriple, build_tree


@dataclass(frozen=True)
class TreeSpec:
    name: str
    title: str
    intro: str
    nodes: Dict[str, str]
    edges: Tuple[EdgeTriple, ...]
    fill_in: bool = False


CAR_TROUBLESHOOTING = TreeSpec(
    name="car",
    title="Car troubleshooting",
    intro="Answer a few questions and we will find out why your car won't start.",
    nodes={
        "silent": "Is the car silent when you turn the key?",
        "corroded": "Are the battery terminals corroded?",
        "clicking": "Does the car make a clicking noise?",
        "clean_terminals": "Clean terminals and try starting again.",
        "replace_cables": "Replace cables and try again.",
        "replace_battery": "Replace the battery.",
        "cranks": "Does the car crank up but fail to start?",
        "spark_plugs": "Check spark plug connections.",
        "starts_then_dies": "Does the engine start and then die?",
        "fuel_injection": "Does your car have fuel injection?",
        "mechanic": "No further questions. Please consult a mechanic.",
        "choke": "Check to ensure the choke is opening and closing.",
        "service": "Get it in for service.",
    },
    edges=(
        ("silent", "corroded", True),
        ("silent", "clicking", False),
        ("corroded", "clean_terminals", True),
        ("corroded", "replace_cables", False),
        ("clicking", "replace_battery", True),
        ("clicking", "cranks", False),
        ("cranks", "spark_plugs", True),
        ("cranks", "starts_then_dies", False),
        ("starts_then_dies", "fuel_injection", True),
        ("starts_then_dies", "mechanic", False),
        ("fuel_injection", "service", True),
        ("fuel_injection", "choke", False),
    ),
)


MADLIBS_ADVENTURE = TreeSpec(
    name="madlibs",
    title="Mad Libs adventure",
    intro="Welcome to Mad Libs! You will be asked for words to fill in the blanks of a story.",
    fill_in=True,
    nodes={
        "breakfast": "Did you ever {verb} a {adjective} {noun} before breakfast?",
        "wizard": "Did the wizard offer you a {noun} in return?",
        "bicycle": "Were you instead chased by a {adjective} {noun} on a bicycle?",
        "secret_door": "Did you accept the {noun} and use it to unlock a secret door?",
        "football": "Did you politely decline and invite the {noun} to a game of football?",
        "riddle": "Did the {noun} demand you answer a riddle about flowers?",
        "sneak": "Did you quietly sneak into a {noun}'s house instead?",
        "portal": "Did the correct answer to the riddle open a portal to {noun}?",
        "ruler": "THE END: You are crowned ruler of the land. Enjoy your reign!",
        "talking": "THE END: You are turned into a talking {noun}. Enjoy your new life!",
        "spontaneous": "Did your spontaneous decision cause a {adjective} {noun} to unfold?",
        "saved_town": "THE END: You save the town, accidentally.",
        "blamed": "THE END: You are blamed for everything and sent to {noun}.",
        "dusty": "Did you find a dusty {noun} that spoke in riddles?",
        "wishes": "THE END: It grants you three oddly specific wishes.",
        "dream": "THE END: You wake up. It was all a dream... or was it?",
    },
    edges=(
        ("breakfast", "wizard", True),
        ("breakfast", "bicycle", False),
        ("wizard", "secret_door", True),
        ("wizard", "football", False),
        ("bicycle", "riddle", True),
        ("bicycle", "sneak", False),
        ("secret_door", "portal", True),
        ("secret_door", "spontaneous", False),
        ("football", "spontaneous", True),
        ("football", "dusty", False),
        ("riddle", "portal", True),
        ("riddle", "dusty", False),
        ("sneak", "spontaneous", True),
        ("sneak", "dusty", False),
        ("portal", "ruler", True),
        ("portal", "talking", False),
        ("spontaneous", "saved_town", True),
        ("spontaneous", "blamed", False),
        ("dusty", "wishes", True),
        ("dusty", "dream", False),
    ),
)


TREES: Dict[str, TreeSpec] = {spec.name: spec for spec in (CAR_TROUBLESHOOTING, MADLIBS_ADVENTURE)}


def available_trees() -> Tuple[TreeSpec, ...]:
    return tuple(TREES.values())


def get_spec(name: str) -> TreeSpec:
    try:
        return TREES[name]
    except KeyError:
        raise KeyError(f"Unknown tree {name!r}; expected one of: {', '.join(TREES)}") from None


def build_from_spec(spec: TreeSpec) -> DecisionTree:
    return build_tree(spec.name, spec.nodes, spec.edges, fill_in=spec.fill_in)


@lru_cache
def load_tree(name: str) -> DecisionTree:
    return build_from_spec(get_spec(name))
