"""
Kalah (Mancala) rules with extra turns and the empty house capture.

Board layout, always seen from the side that is to move at the search root:

          12  11  10   9   8   7
      13                           6
           0   1   2   3   4   5

South owns houses 0-5 and store 6, North owns houses 7-12 and store 13.
Seeds are sown towards increasing indices (mod 14) and a side never sows
into the opponent's store. House ``i`` faces house ``12 - i``.

States are read-only numpy arrays of 14 seed counts. Every rule function
returns a freshly derived state so ancestors stay valid while siblings are
generated during search.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

import numpy as np

from kalah_search.game.game import Game


NUM_SLOTS = 14
NUM_HOUSES = 6


@dataclass(frozen=True)
class Side:
    """Which six slots are the mover's houses and which store is theirs."""
    name: str
    houses: range
    store: int
    opponent_store: int

    @property
    def opponent(self) -> 'Side':
        return NORTH if self == SOUTH else SOUTH

    def owns_house(self, index: int) -> bool:
        return index in self.houses


SOUTH = Side('south', range(0, NUM_HOUSES), NUM_HOUSES, 2 * NUM_HOUSES + 1)
NORTH = Side('north', range(NUM_HOUSES + 1, 2 * NUM_HOUSES + 1), 2 * NUM_HOUSES + 1, NUM_HOUSES)


class MoveOutcome(NamedTuple):
    """Result of sowing one house, after the capture rule has been applied."""
    state: np.ndarray
    landing: int
    extra_turn: bool
    captured: int


def freeze(state: np.ndarray) -> np.ndarray:
    state.flags.writeable = False
    return state


def to_state(board) -> np.ndarray:
    """
    Validate a 14 slot board and return it as a read-only state.

    Raises:
        ValueError: if the board does not hold exactly 14 non-negative counts
    """
    state = np.array(board, dtype=np.int64)
    validate_state(state)
    return freeze(state)


def validate_state(state: np.ndarray):
    if state.shape != (NUM_SLOTS,):
        raise ValueError(f"State must hold {NUM_SLOTS} slots, got shape {state.shape}")
    if (state < 0).any():
        raise ValueError(f"State has negative seed counts: {state.tolist()}")


def get_initial_state(seeds_per_house: int = 4) -> np.ndarray:
    state = np.zeros(NUM_SLOTS, dtype=np.int64)
    state[SOUTH.houses.start:SOUTH.houses.stop] = seeds_per_house
    state[NORTH.houses.start:NORTH.houses.stop] = seeds_per_house
    return freeze(state)


def opposite(index: int) -> int:
    return 2 * NUM_HOUSES - index


def is_terminal(state: np.ndarray) -> bool:
    """The game is over as soon as either side has no seeds left in its houses."""
    if state[SOUTH.houses.start:SOUTH.houses.stop].sum() == 0:
        return True
    return state[NORTH.houses.start:NORTH.houses.stop].sum() == 0


def valid_moves(state: np.ndarray, side: Side) -> List[int]:
    return [house for house in side.houses if state[house] > 0]


def _sow_into(board: np.ndarray, house: int, side: Side) -> int:
    seeds = int(board[house])
    board[house] = 0
    index = house
    while seeds > 0:
        index = (index + 1) % NUM_SLOTS
        if index == side.opponent_store:
            continue
        board[index] += 1
        seeds -= 1
    return index


def _check_house(state: np.ndarray, house: int, side: Side):
    if not side.owns_house(house):
        raise ValueError(f"House {house} does not belong to {side.name}")
    if state[house] == 0:
        raise ValueError(f"House {house} is empty")


def sow(state: np.ndarray, house: int, side: Side) -> Tuple[np.ndarray, int]:
    """
    Distribute the seeds of ``house`` one by one into the following slots.

    The opponent's store is jumped over without consuming a seed.

    Returns:
        (new_state, landing) - the sown state and the slot that received the last seed
    """
    _check_house(state, house, side)
    child = state.copy()
    landing = _sow_into(child, house, side)
    return freeze(child), landing


def apply_capture_if_eligible(state: np.ndarray, landing: int, side: Side) -> Tuple[np.ndarray, int]:
    """
    Empty house rule: a last seed landing alone in one of the mover's houses
    captures itself and the opposite house, provided the opposite house has seeds.

    Returns:
        (new_state, captured) - captured is the number of seeds moved to the store
    """
    facing = opposite(landing) if side.owns_house(landing) else None
    if facing is None or state[landing] != 1 or state[facing] == 0:
        return state, 0

    child = state.copy()
    captured = int(child[facing]) + 1
    child[side.store] += captured
    child[landing] = 0
    child[facing] = 0
    return freeze(child), captured


def apply_move(state: np.ndarray, house: int, side: Side) -> MoveOutcome:
    """Sow one house and resolve the capture rule; does not follow extra turns."""
    child, landing = sow(state, house, side)
    if landing == side.store:
        return MoveOutcome(child, landing, True, 0)

    child, captured = apply_capture_if_eligible(child, landing, side)
    return MoveOutcome(child, landing, False, captured)


def _resolve_chain(state: np.ndarray, side: Side) -> List[np.ndarray]:
    """Every state reachable by finishing the mover's turn from ``state``."""
    finals = []
    for house in valid_moves(state, side):
        outcome = apply_move(state, house, side)
        if outcome.extra_turn and not is_terminal(outcome.state):
            finals.extend(_resolve_chain(outcome.state, side))
        else:
            finals.append(outcome.state)
    return finals


def generate_moves(state: np.ndarray, side: Side) -> List[Tuple[int, np.ndarray]]:
    """
    All (move, state) pairs available to ``side``, in ascending house order.

    A last seed in the mover's own store grants another sow from the resulting
    state. Such chains are followed to the end and every final state is
    labelled with the house that started the chain. A chain stops early when
    it reaches a terminal state.
    """
    children = []
    for house in valid_moves(state, side):
        outcome = apply_move(state, house, side)
        if outcome.extra_turn and not is_terminal(outcome.state):
            finals = _resolve_chain(outcome.state, side)
        else:
            finals = [outcome.state]
        children.extend((house, final) for final in finals)
    return children


def side_totals(state: np.ndarray) -> Tuple[int, int]:
    """Seeds owned by (south, north): houses plus store."""
    south = int(state[SOUTH.houses.start:SOUTH.store + 1].sum())
    north = int(state[NORTH.houses.start:NORTH.store + 1].sum())
    return south, north


def sweep(state: np.ndarray) -> np.ndarray:
    """End of game: every seed left in a house goes to its owner's store."""
    child = state.copy()
    for side in (SOUTH, NORTH):
        houses = slice(side.houses.start, side.houses.stop)
        child[side.store] += child[houses].sum()
        child[houses] = 0
    return freeze(child)


def rotate(state: np.ndarray) -> np.ndarray:
    """The same board seen from the other side: north's slots become 0-6."""
    return freeze(np.roll(state, NUM_HOUSES + 1))


def render(state: np.ndarray) -> str:
    north = " ".join(f"{state[i]:2d}" for i in reversed(NORTH.houses))
    south = " ".join(f"{state[i]:2d}" for i in SOUTH.houses)
    return (
        f"     {north}\n"
        f"{state[NORTH.store]:3d}{' ' * 19}{state[SOUTH.store]:3d}\n"
        f"     {south}"
    )


class Kalah(Game):
    """
    Kalah game used by the arena.

    Board: 6 houses and 1 store per side
    Actions: house index 0-5 relative to the player making the move
    Player 1 is south, player -1 is north.
    """

    def __init__(self, num_houses=NUM_HOUSES, seeds_per_house=4):
        if num_houses != NUM_HOUSES:
            raise ValueError(f"Only {NUM_HOUSES} houses per side are supported")
        self.num_houses = num_houses
        self.seeds_per_house = seeds_per_house
        self.action_size = num_houses

    def __repr__(self):
        return f"Kalah({self.num_houses}, {self.seeds_per_house})"

    def get_initial_state(self):
        return get_initial_state(self.seeds_per_house)

    @staticmethod
    def side_of(player) -> Side:
        return SOUTH if player == 1 else NORTH

    def play(self, state, action, player) -> MoveOutcome:
        """Apply one sow for ``player``; the outcome says whether they move again."""
        if not 0 <= action < self.num_houses:
            raise ValueError(f"Action {action} is outside 0-{self.num_houses - 1}")
        side = self.side_of(player)
        return apply_move(state, side.houses[action], side)

    def get_next_state(self, state, action, player):
        return self.play(state, action, player).state

    def get_valid_moves(self, state, player):
        side = self.side_of(player)
        return (state[side.houses.start:side.houses.stop] > 0).astype(np.uint8)

    def get_value_and_terminated(self, state, player):
        if not is_terminal(state):
            return 0, False
        south, north = side_totals(state)
        if south == north:
            return 0, True
        value = 1 if south > north else -1
        return (value if player == 1 else -value), True

    def get_opponent(self, player):
        return -player

    def get_opponent_value(self, value):
        return -value

    def change_perspective(self, state, player):
        return state if player == 1 else rotate(state)
