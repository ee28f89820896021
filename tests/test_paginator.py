import pytest

from bip_report.errors import ValidationError
from bip_report.paginator import PaginationState, Paginator, view
from bip_report.table import Table


def numbered_table(total_rows: int) -> Table:
    return Table(rows=[["id"]] + [[str(i)] for i in range(1, total_rows)])


class TestPaginationState:
    def test_max_page_counts_header_row(self) -> None:
        assert PaginationState(page_size=10, total_rows=25).max_page == 2
        assert PaginationState(page_size=10, total_rows=20).max_page == 2
        assert PaginationState(page_size=10, total_rows=9).max_page == 0

    def test_next_stops_at_max_page(self) -> None:
        state = PaginationState(page_size=10, total_rows=25)
        for _ in range(3):
            state = state.next()
        assert state.page_index == 2

        assert state.next().page_index == 2

    def test_prev_stops_at_zero(self) -> None:
        state = PaginationState(page_size=10, total_rows=25)

        assert state.prev().page_index == 0
        assert state.next().next().prev().page_index == 1

    def test_reset(self) -> None:
        state = PaginationState(page_size=10, total_rows=25, page_index=2)

        assert state.reset().page_index == 0

    def test_transitions_return_new_values(self) -> None:
        state = PaginationState(page_size=10, total_rows=25)

        state.next()

        assert state.page_index == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page_size": 0, "total_rows": 5},
            {"page_size": 10, "total_rows": -1},
            {"page_size": 10, "total_rows": 25, "page_index": 3},
            {"page_size": 10, "total_rows": 25, "page_index": -1},
        ],
    )
    def test_invalid_states_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            PaginationState(**kwargs)

    def test_page_count_rounds_up(self) -> None:
        assert PaginationState(page_size=10, total_rows=25).page_count == 3
        assert PaginationState(page_size=10, total_rows=20).page_count == 2
        assert PaginationState(page_size=10, total_rows=0).page_count == 0


class TestView:
    def test_first_page(self) -> None:
        table = numbered_table(25)
        page = view(table, PaginationState(page_size=10, total_rows=25))

        assert page.header == ["id"]
        assert page.body == [[str(i)] for i in range(1, 10)]
        assert page.page_index == 0
        assert page.page_count == 3

    def test_later_pages_render_first_slice_row_as_header(self) -> None:
        table = numbered_table(25)
        page = view(table, PaginationState(page_size=10, total_rows=25, page_index=1))

        assert page.header == ["10"]
        assert page.body == [[str(i)] for i in range(11, 20)]

    def test_last_page_is_partial(self) -> None:
        table = numbered_table(25)
        page = view(table, PaginationState(page_size=10, total_rows=25, page_index=2))

        assert page.header == ["20"]
        assert page.body == [["21"], ["22"], ["23"], ["24"]]

    def test_page_past_the_data_is_empty(self) -> None:
        table = numbered_table(20)
        page = view(table, PaginationState(page_size=10, total_rows=20, page_index=2))

        assert page.header == []
        assert page.body == []

    def test_as_dict_is_one_based(self) -> None:
        page = view(numbered_table(3), PaginationState(page_size=10, total_rows=3))

        assert page.as_dict() == {
            "page": 1,
            "page_count": 1,
            "header": ["id"],
            "rows": [["1"], ["2"]],
        }


class TestPaginator:
    def test_install_resets_cursor(self) -> None:
        paginator = Paginator(page_size=10)
        paginator.install(numbered_table(25))
        paginator.next()
        paginator.next()
        assert paginator.state.page_index == 2

        page = paginator.install(numbered_table(40))

        assert paginator.state.page_index == 0
        assert paginator.state.total_rows == 40
        assert page.header == ["id"]

    def test_next_and_prev_bounds(self) -> None:
        paginator = Paginator(page_size=10)
        paginator.install(numbered_table(25))

        assert [paginator.next().page_index for _ in range(4)] == [1, 2, 2, 2]
        assert [paginator.prev().page_index for _ in range(3)] == [1, 0, 0]

    def test_reset(self) -> None:
        paginator = Paginator(page_size=10)
        paginator.install(numbered_table(25))
        paginator.next()

        assert paginator.reset().page_index == 0

    def test_handle_commands(self) -> None:
        paginator = Paginator(page_size=10)
        paginator.install(numbered_table(25))

        assert paginator.handle("next").page_index == 1
        assert paginator.handle("prev").page_index == 0
        with pytest.raises(ValidationError):
            paginator.handle("last")

    def test_empty_before_first_install(self) -> None:
        paginator = Paginator(page_size=10)

        page = paginator.view()

        assert page.header == []
        assert page.body == []
        assert paginator.next().page_index == 0
