"""Tests for results and their combined children view."""

import asyncio
from datetime import date

import pytest

from fadm.result import Result, Status
from tests.conftest import run


async def _delayed(label: str, delay: float) -> Result:
    await asyncio.sleep(delay)
    return Result.success(label)


async def _failing() -> Result:
    await asyncio.sleep(0)
    raise OSError("disk on fire")


class TestFactories:
    def test_statuses(self):
        assert Result.success("ok").status == Status.SUCCESS
        assert Result.warning("meh").status == Status.WARNING
        assert Result.error("bad").status == Status.ERROR

    def test_message_without_parameters_is_verbatim(self):
        assert Result.success("Nothing {0} to format").message == "Nothing {0} to format"

    def test_message_interpolates_positional_parameters(self):
        result = Result.error("The file '{0}' must have following extensions [{1}]", "a.txt", ".dll,.exe")
        assert result.message == "The file 'a.txt' must have following extensions [.dll,.exe]"

    def test_message_formatting_is_locale_independent(self):
        result = Result.success("{0} bytes, {1}, {2}", 1234.5, date(2015, 3, 1), 7)
        assert result.message == "1234.5 bytes, 2015-03-01, 7"

    @pytest.mark.parametrize("template", [None, "", "   "])
    def test_blank_template_rejected(self, template):
        with pytest.raises(ValueError):
            Result.success(template)

    def test_from_exception(self):
        result = Result.from_exception(FileNotFoundError("missing.dll"))
        assert result.status == Status.ERROR
        assert result.message == "missing.dll"

    def test_from_exception_without_message_uses_type(self):
        assert Result.from_exception(KeyError()).message == "KeyError"

    def test_new_result_is_leaf(self):
        result = Result.success("leaf")
        assert result.is_leaf
        assert run(result.collect()) == []

    def test_status_renders_as_name(self):
        assert str(Status.WARNING) == "Warning"


class TestChildren:
    def test_with_results_returns_self_and_keeps_order(self):
        first, second = Result.success("first"), Result.warning("second")
        parent = Result.success("parent")
        assert parent.with_results([first]).with_results([second]) is parent
        assert not parent.is_leaf
        assert run(parent.collect()) == [first, second]

    def test_with_results_none_rejected(self):
        with pytest.raises(ValueError):
            Result.success("parent").with_results(None)

    def test_with_pending_none_rejected(self):
        with pytest.raises(ValueError):
            Result.success("parent").with_pending(None)

    def test_resolved_first_then_completion_order(self):
        async def scenario():
            parent = Result.success("parent")
            parent.with_pending(
                [_delayed("300", 0.3), _delayed("100", 0.1), _delayed("200", 0.2)]
            )
            parent.with_results([Result.success("sync-1"), Result.success("sync-2")])
            return [child.message for child in await parent.collect()]

        assert run(scenario()) == ["sync-1", "sync-2", "100", "200", "300"]

    def test_pending_children_run_concurrently(self):
        async def scenario():
            loop = asyncio.get_running_loop()
            start = loop.time()
            parent = Result.success("parent").with_pending(
                _delayed(str(i), 0.2) for i in range(5)
            )
            children = await parent.collect()
            return len(children), loop.time() - start

        count, elapsed = run(scenario())
        assert count == 5
        assert elapsed < 0.8

    def test_simultaneous_completions_keep_attachment_order(self):
        async def scenario():
            parent = Result.success("parent").with_pending(
                [Result.success("a").as_awaitable(), Result.success("b").as_awaitable()]
            )
            await asyncio.sleep(0.01)
            return [child.message for child in await parent.collect()]

        assert run(scenario()) == ["a", "b"]

    def test_failing_pending_child_becomes_error(self):
        async def scenario():
            parent = Result.success("parent").with_pending(
                [_failing(), _delayed("fine", 0.05)]
            )
            return await parent.collect()

        children = run(scenario())
        assert [c.status for c in children] == [Status.ERROR, Status.SUCCESS]
        assert children[0].message == "disk on fire"

    def test_view_is_single_use(self):
        async def scenario():
            parent = Result.success("parent").with_pending([_delayed("once", 0.01)])
            first = await parent.collect()
            second = await parent.collect()
            return first, second

        first, second = run(scenario())
        assert [c.message for c in first] == ["once"]
        assert second == []

    def test_resolved_children_not_yielded_twice(self):
        async def scenario():
            parent = Result.success("parent").with_results([Result.success("resolved")])
            parent.with_pending([_delayed("pending", 0.01)])
            first = await parent.collect()
            parent.with_results([Result.success("late")])
            second = await parent.collect()
            return first, second

        first, second = run(scenario())
        assert [c.message for c in first] == ["resolved", "pending"]
        assert [c.message for c in second] == ["late"]
