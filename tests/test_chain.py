from app.services.chain import Abstain, ChainResolver
from helpers import run


class Stub:
    def __init__(self, name, outcome, log):
        self.name = name
        self.outcome = outcome
        self.log = log

    async def attempt(self, query):
        self.log.append(self.name)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class Terminal:
    name = "terminal"

    def __init__(self):
        self.seen = None

    def resolve(self, query, partial=None):
        self.seen = (query, partial)
        return f"terminal:{query}"


def test_first_definitive_answer_wins():
    log = []
    chain = ChainResolver([Stub("a", Abstain("nope"), log), Stub("b", "B", log), Stub("c", "C", log)], Terminal())
    assert run(chain.resolve("q")) == "B"
    assert log == ["a", "b"]


def test_exceptions_count_as_abstentions():
    log = []
    chain = ChainResolver([Stub("a", RuntimeError("boom"), log), Stub("b", "B", log)], Terminal())
    assert run(chain.resolve("q")) == "B"
    assert log == ["a", "b"]


def test_terminal_answers_when_everything_abstains():
    log = []
    term = Terminal()
    chain = ChainResolver([Stub("a", Abstain("x"), log), Stub("b", KeyError("y"), log)], term)
    assert run(chain.resolve("q")) == "terminal:q"
    assert log == ["a", "b"]
    assert term.seen == ("q", None)


def test_first_partial_is_handed_to_terminal():
    log = []
    term = Terminal()
    chain = ChainResolver(
        [Stub("a", Abstain("x", partial="first"), log), Stub("b", Abstain("y", partial="second"), log)],
        term,
    )
    run(chain.resolve("q"))
    assert term.seen == ("q", "first")


def test_negative_answer_is_still_definitive():
    log = []
    chain = ChainResolver([Stub("a", False, log), Stub("b", True, log)], Terminal())
    assert run(chain.resolve("q")) is False
    assert log == ["a"]


def test_empty_chain_goes_straight_to_terminal():
    assert run(ChainResolver([], Terminal()).resolve("q")) == "terminal:q"
