import threading

import pytest

from apidesc.domain.collection import Collection
from apidesc.domain.errors import CommandValidationError
from apidesc.extractors.annotations.parser import RegexAnnotationParser
from apidesc.registry.cache import CommandCache


class CountingParser(RegexAnnotationParser):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def parse(self, text):
        self.calls += 1
        return super().parse(text)


class CreateWidget:
    """
    @cmd foo required="true"
    @cmd color default="red"
    """


def test_derivation_is_cached_per_identifier():
    parser = CountingParser()
    cache = CommandCache(parser=parser)

    first = cache.get_or_derive(CreateWidget)
    second = cache.get_or_derive(CreateWidget)

    assert first is second
    assert parser.calls == 1
    assert len(cache) == 1
    assert first.handler_class in cache
    assert cache.get(first.handler_class) is first


def test_separate_caches_do_not_share_entries():
    a = CommandCache()
    b = CommandCache()
    assert a.get_or_derive(CreateWidget) is not b.get_or_derive(CreateWidget)


def test_clear_forces_rederivation():
    parser = CountingParser()
    cache = CommandCache(parser=parser)
    cache.get_or_derive(CreateWidget)
    cache.clear()
    cache.get_or_derive(CreateWidget)
    assert parser.calls == 2


def test_concurrent_derivation_parses_once():
    parser = CountingParser()
    cache = CommandCache(parser=parser)
    results = []

    def worker():
        results.append(cache.get_or_derive(CreateWidget))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert parser.calls == 1
    assert all(r is results[0] for r in results)


def test_derived_command_validates():
    command = CommandCache().get_or_derive(CreateWidget)
    config = Collection()

    with pytest.raises(CommandValidationError) as exc_info:
        command.validate_config(config)

    assert len(exc_info.value.errors) == 1
    assert "foo" in exc_info.value.errors[0]
    assert config.get("color") == "red"
