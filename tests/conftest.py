import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from handcricket.database import Base
from handcricket.models import Setting  # noqa: F401  (registers the table)
from handcricket.engine.match_engine import MatchEngine
from handcricket.engine.game_session import GameSession
from handcricket.engine.stats_store import StatsStore
from handcricket.engine.state import BatBowl, Difficulty, Side, TossChoice


class ScriptedRng:
    """
    Stand-in for random.Random that replays queued values.

    random() -> queued floats, then `random_default`
    randint() -> queued ints, then the lower bound
    choice() -> queued values, then the first element
    """

    def __init__(self, randoms=(), ints=(), choices=(), random_default=0.0):
        self.randoms = list(randoms)
        self.ints = list(ints)
        self.choices = list(choices)
        self.random_default = random_default
        self.choice_calls = []

    def random(self):
        return self.randoms.pop(0) if self.randoms else self.random_default

    def randint(self, a, b):
        value = self.ints.pop(0) if self.ints else a
        assert a <= value <= b
        return value

    def choice(self, seq):
        seq = list(seq)
        self.choice_calls.append(seq)
        if self.choices:
            value = self.choices.pop(0)
            assert value in seq
            return value
        return seq[0]


class FakeCommentary:
    def __init__(self, text="What a match!"):
        self.text = text
        self.summaries = []

    def commentate(self, summary):
        self.summaries.append(summary)
        return self.text


def start_match(engine: MatchEngine, rng: ScriptedRng, batting: Side = Side.PLAYER,
                difficulty: Difficulty = Difficulty.HARD):
    """Select difficulty, win the toss with rock vs scissors and elect to bat/bowl."""
    rng.choices.insert(0, TossChoice.SCISSORS)
    engine.select_difficulty(difficulty)
    engine.resolve_toss(TossChoice.ROCK)
    return engine.choose_bat_or_bowl(BatBowl.BAT if batting is Side.PLAYER else BatBowl.BOWL)


def play(target, value):
    """Play one ball and release the processing lock; works on engines and sessions."""
    step = target.play_ball(value)
    target.complete_resolution()
    return step


@pytest.fixture
def rng():
    return ScriptedRng()


@pytest.fixture
def engine(rng):
    return MatchEngine(rng=rng)


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads (for TestClient)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine):
    return StatsStore(sessionmaker(bind=db_engine))


@pytest.fixture
def commentary():
    return FakeCommentary()


@pytest.fixture
def game(store, engine, commentary):
    return GameSession(store, engine=engine, commentary=commentary)
