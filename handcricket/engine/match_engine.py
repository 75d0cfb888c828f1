"""
Match Engine - the hand cricket state machine.

DIFFICULTY_SELECT -> TOSS -> BATTING(side) -> INNINGS_BREAK -> BATTING(other) -> GAME_OVER

Each ball both sides reveal 1-6. Equal numbers dismiss the batter, otherwise
the batter's number is added to the batting side's score. The side batting
second chases `target` (first innings score + 1).
"""
import logging
import random
from typing import Optional

from handcricket.engine.errors import InvalidMove, InvalidPhase, ResolutionPending
from handcricket.engine.opponent import AdaptiveOpponent
from handcricket.engine.state import (
    BatBowl, Difficulty, Dismissal, HISTORY_LIMIT, InningsSwitched, LogEntry,
    MatchEnded, MatchResult, MatchSnapshot, MatchState, MILESTONES,
    MilestoneReached, Phase, RESULT_TEXT, Role, RunsScored, Side, StepResult,
    TossChoice,
)
from handcricket.engine.toss import TossResolver

logger = logging.getLogger(__name__)

MILESTONE_MESSAGES = {
    50: "50 Runs! Well played!",
    100: "100 Runs! A brilliant century!",
}


def _coerce(enum_cls, value):
    """Accept an enum member or its string value."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidMove(f"Invalid {enum_cls.__name__}: {value!r}")


class MatchEngine:
    """
    Owns the one live match. Every control call returns a StepResult with the
    updated snapshot and the events the transition emitted; rejected calls
    raise a MatchError without touching state.

    After a ball is played the engine holds a processing lock until the caller
    invokes complete_resolution() (typically after its reveal animation).
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        opponent: Optional[AdaptiveOpponent] = None,
        toss_resolver: Optional[TossResolver] = None,
    ):
        self.rng = rng or random.Random()
        self.opponent = opponent or AdaptiveOpponent(self.rng)
        self.toss_resolver = toss_resolver or TossResolver(self.rng)
        self.state = MatchState()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def ready_for_next_ball(self) -> bool:
        return self.state.phase == Phase.BATTING and not self.state.processing

    # --- Control surface ---

    def reset(self) -> StepResult:
        self.state = MatchState()
        return self._step()

    def select_difficulty(self, level) -> StepResult:
        level = _coerce(Difficulty, level)
        self._require_phase(Phase.DIFFICULTY_SELECT)

        self.state.difficulty = level
        self.state.phase = Phase.TOSS
        self.state.message = "Rock, paper or scissors? Win the toss to choose."
        return self._step()

    def resolve_toss(self, choice) -> StepResult:
        choice = _coerce(TossChoice, choice)
        self._require_phase(Phase.TOSS)
        if self.state.awaiting_bat_bowl:
            raise InvalidPhase("Toss already won - choose to bat or bowl")

        outcome = self.toss_resolver.resolve_toss(choice)
        s = self.state
        picked = f"You chose {choice.value}, Computer chose {outcome.computer_choice.value}."

        if outcome.is_tie:
            s.message = f"{picked} It's a tie! Toss again."
        elif outcome.winner is Side.PLAYER:
            s.awaiting_bat_bowl = True
            s.message = f"{picked} You won the toss! Bat or bowl?"
        else:
            decision = outcome.computer_decision
            self._start_match(Side.COMPUTER if decision is BatBowl.BAT else Side.PLAYER)
            s.message = f"{picked} Computer won the toss and chose to {decision.value}. {s.message}"

        return self._step(toss=outcome)

    def choose_bat_or_bowl(self, choice) -> StepResult:
        choice = _coerce(BatBowl, choice)
        if self.state.phase != Phase.TOSS or not self.state.awaiting_bat_bowl:
            raise InvalidPhase("Only the toss winner can choose to bat or bowl")

        self._start_match(Side.PLAYER if choice is BatBowl.BAT else Side.COMPUTER)
        return self._step()

    def play_ball(self, value) -> StepResult:
        s = self.state
        if s.phase != Phase.BATTING:
            raise InvalidPhase(f"Cannot play a ball during {s.phase.value}")
        if s.processing:
            raise ResolutionPending("Previous ball is still being revealed")
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 6:
            raise InvalidMove(f"Ball value must be 1-6, got {value!r}")

        s.processing = True
        s.ball_history = (s.ball_history + [value])[-HISTORY_LIMIT:]

        # The predictor always reads the human's inputs; the computer's role
        # only picks the strategy.
        computer_role = Role.BOWLING if s.batting_side is Side.PLAYER else Role.BATTING
        computer_move = self.opponent.next_move(s.ball_history, s.difficulty.weight, computer_role)

        s.last_player_move = value
        s.last_computer_move = computer_move

        if s.batting_side is Side.PLAYER:
            batsman, bowler = value, computer_move
        else:
            batsman, bowler = computer_move, value

        if batsman == bowler:
            events = self._dismiss()
        else:
            events = self._score(batsman)
        return self._step(events)

    def complete_resolution(self) -> StepResult:
        self.state.processing = False
        return self._step()

    def snapshot(self) -> MatchSnapshot:
        s = self.state
        return MatchSnapshot(
            phase=s.phase,
            player_score=s.player_score,
            computer_score=s.computer_score,
            target=s.target,
            last_player_move=s.last_player_move,
            last_computer_move=s.last_computer_move,
            message=s.message,
            batting_side=s.batting_side,
            innings=s.innings_index,
            difficulty=s.difficulty,
            awaiting_bat_bowl=s.awaiting_bat_bowl,
            ready_for_next_ball=self.ready_for_next_ball,
            result=s.result,
            log=tuple(s.log),
        )

    # --- Transitions ---

    def _require_phase(self, phase: Phase):
        if self.state.phase != phase:
            raise InvalidPhase(f"Expected {phase.value}, match is in {self.state.phase.value}")

    def _start_match(self, batting_side: Side):
        s = self.state
        s.awaiting_bat_bowl = False
        s.innings_index = 1
        s.target = 0
        s.player_score = 0
        s.computer_score = 0
        s.ball_history = []
        s.last_player_move = None
        s.last_computer_move = None
        self._start_innings(batting_side)

    def _start_innings(self, side: Side):
        s = self.state
        s.batting_side = side
        s.phase = Phase.BATTING
        if side is Side.PLAYER:
            s.message = "You are batting. Let's start!"
        else:
            s.message = "Computer is batting. Get them out!"

    def _dismiss(self) -> list:
        s = self.state
        side = s.batting_side
        score = s.score_of(side)
        events = [Dismissal(side=side, score=score)]

        if side is Side.PLAYER:
            self._log("🔴", f"OUT! You scored {score}.")
        else:
            self._log("🔴", f"OUT! Computer scored {score}.")

        if s.target == 0:
            s.target = score + 1
            s.phase = Phase.INNINGS_BREAK
            s.innings_index = 2
            s.ball_history = []
            next_side = side.other
            if next_side is Side.PLAYER:
                s.player_score = 0
                self._log("🔄", f"Innings Break. You need {s.target} to win.")
            else:
                s.computer_score = 0
                self._log("🔄", f"Innings Break. Computer needs {s.target} to win.")
            self._start_innings(next_side)
            s.message = f"OUT! Target is {s.target}. {s.message}"
            logger.debug("Innings switched, %s chasing %d", next_side.value, s.target)
            events.append(InningsSwitched(target=s.target, batting_side=next_side))
            return events

        if score == s.target - 1:
            result = MatchResult.DRAW
        elif side is Side.PLAYER:
            result = MatchResult.LOSS
        else:
            result = MatchResult.WIN
        events.append(self._end_match(result))
        return events

    def _score(self, runs: int) -> list:
        s = self.state
        side = s.batting_side
        events = []

        if side is Side.PLAYER:
            previous = s.player_score
            s.player_score += runs
            total = s.player_score
            self._log("🏏", f"You score {runs} run(s).")
            s.message = f"You score {runs} run(s)."
            events.append(RunsScored(side=side, runs=runs, total=total))
            for milestone in MILESTONES:
                if previous < milestone <= total:
                    events.append(MilestoneReached(score=total, milestone=milestone))
                    s.message = MILESTONE_MESSAGES[milestone]
        else:
            s.computer_score += runs
            total = s.computer_score
            self._log("💻", f"Computer scores {runs} run(s).")
            s.message = f"Computer scores {runs} run(s)."
            events.append(RunsScored(side=side, runs=runs, total=total))

        if s.target > 0 and total >= s.target:
            events.append(self._end_match(MatchResult.WIN if side is Side.PLAYER else MatchResult.LOSS))
        return events

    def _end_match(self, result: MatchResult) -> MatchEnded:
        s = self.state
        s.phase = Phase.GAME_OVER
        s.result = result
        title, text = RESULT_TEXT[result]
        s.message = f"{title} {text}"
        self._log("🏁", f"{title} {s.player_score} vs {s.computer_score}.")
        logger.info(
            "Match over: %s (player %d, computer %d, target %d)",
            result.value, s.player_score, s.computer_score, s.target,
        )
        return MatchEnded(
            result=result,
            player_score=s.player_score,
            computer_score=s.computer_score,
            target=s.target,
        )

    def _log(self, icon: str, text: str):
        self.state.log.insert(0, LogEntry(icon, text))

    def _step(self, events: Optional[list] = None, toss=None) -> StepResult:
        return StepResult(snapshot=self.snapshot(), events=events or [], toss=toss)
