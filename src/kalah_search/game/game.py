from abc import ABC, abstractmethod


class Game(ABC):
    """
    Abstract Base Class for a two-player sowing game driven by the arena.

    Players are identified as 1 (south, first to move) and -1 (north).
    """

    @abstractmethod
    def get_initial_state(self):
        """
        Returns the initial state of the game.
        """
        pass

    @abstractmethod
    def get_next_state(self, state, action, player):
        """
        Returns the next state given the current state, action, and player.
        """
        pass

    @abstractmethod
    def get_valid_moves(self, state, player):
        """
        Returns a binary mask of valid moves for the given player.
        """
        pass

    @abstractmethod
    def get_value_and_terminated(self, state, player):
        """
        Returns the value of the state for the given player
        (1 for win, 0 for draw, -1 for loss) and whether the game has terminated.
        """
        pass

    @abstractmethod
    def get_opponent(self, player):
        """
        Returns the opponent of the current player.
        """
        pass

    @abstractmethod
    def get_opponent_value(self, value):
        """
        Returns the value from the opponent's perspective.
        """
        pass

    @abstractmethod
    def change_perspective(self, state, player):
        """
        Returns the state from the perspective of the given player.
        """
        pass
