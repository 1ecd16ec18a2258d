"""Pilot-driven tests for the Textual order form."""
import asyncio
from unittest.mock import Mock

from field_order.customer_modal import CustomerModal
from field_order.errors import InitializationFailure
from field_order.models import CustomerInfo, Location
from field_order.order_app import OrderFormApp
from field_order.permission_modal import PermissionModal


async def _wait_for_screen(pilot, screen_type):
    for _ in range(100):
        if isinstance(pilot.app.screen, screen_type):
            return
        await pilot.pause(0.01)
    raise AssertionError(f"{screen_type.__name__} never appeared")


def _run(app, scenario):
    async def _main():
        async with app.run_test() as pilot:
            await scenario(pilot)

    asyncio.run(_main())


def test_quantity_entry_and_share_export(products, make_routine, share):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine("share"), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        assert app.app_ready
        await pilot.press("1", "2", "backspace", "j", "j", "5", "d", "k", "3")
        assert app.form.quantities == {"001": "1", "002": "3"}

        await pilot.press("ctrl+s")
        await app.workers.wait_for_complete()
        await pilot.pause()

    _run(app, scenario)

    share.assert_called_once()
    assert app.exporting is False
    assert app.system_status.startswith("Shared order_")
    content = (make_routine("share").cache_dir / app.system_status.split()[-1]).read_text(encoding="utf-8")
    assert content.startswith("Code,Description,Quantity\n001,Toy Car,1\n002,Building Blocks,3\n")
    assert content.endswith("Latitude:,Not available\nLongitude:,Not available")


def test_export_without_quantities_shows_notice(products, make_routine, share):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine("share"), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("0", "ctrl+s")
        await pilot.pause()

    _run(app, scenario)

    share.assert_not_called()
    assert app.system_status == "No Products: Please add quantities to at least one product"
    assert not make_routine("share").cache_dir.exists()


def test_location_permission_granted(products, make_routine):
    reader = Mock(return_value=Location(37.98, 23.72))
    app = OrderFormApp(catalog_loader=lambda: list(products), location_reader=reader, routine=make_routine())

    async def scenario(pilot):
        await _wait_for_screen(pilot, PermissionModal)
        await pilot.press("y")
        await app.workers.wait_for_complete()

    _run(app, scenario)

    assert app.form.location == Location(37.98, 23.72)


def test_location_permission_denied(products, make_routine):
    reader = Mock()
    app = OrderFormApp(catalog_loader=lambda: list(products), location_reader=reader, routine=make_routine())

    async def scenario(pilot):
        await _wait_for_screen(pilot, PermissionModal)
        await pilot.press("n")
        await app.workers.wait_for_complete()

    _run(app, scenario)

    reader.assert_not_called()
    assert app.form.location is None
    assert app.app_ready


def test_catalog_failure_still_becomes_ready(make_routine):
    def failing_loader():
        raise InitializationFailure("offline")

    app = OrderFormApp(catalog_loader=failing_loader, routine=make_routine(), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("1")

    _run(app, scenario)

    assert app.app_ready
    assert app.form.products == []
    assert app.system_status == "Initialization Error: Failed to load app data"


def test_storage_permission_denied_falls_back_to_share(products, make_routine, share, tmp_path):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine("library"), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("2", "ctrl+s")
        await _wait_for_screen(pilot, PermissionModal)
        await pilot.press("n")
        await app.workers.wait_for_complete()
        await pilot.pause()

    _run(app, scenario)

    assert share.call_args.args[0].url.startswith("data:text/csv;base64,")
    assert not (tmp_path / "home").exists()


def test_customer_modal_updates_form(products, make_routine):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine(), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("c")
        await _wait_for_screen(pilot, CustomerModal)
        await pilot.press("a", "c", "m", "e", "x", "backspace", "tab", "e", "l", "1", "enter", "o", "k", "enter")
        await pilot.pause()

    _run(app, scenario)

    assert app.form.customer == CustomerInfo(store="acme", vat="el1", notes="ok")


def test_customer_modal_escape_keeps_previous_values(products, make_routine):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine(), ask_location=False)
    app.form.customer = CustomerInfo(store="Acme")

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("c")
        await _wait_for_screen(pilot, CustomerModal)
        await pilot.press("z", "escape")
        await pilot.pause()

    _run(app, scenario)

    assert app.form.customer == CustomerInfo(store="Acme")


def test_second_export_ignored_while_first_pending(products, make_routine, share):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine("library"), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("2", "ctrl+s")
        await _wait_for_screen(pilot, PermissionModal)
        assert app.exporting
        await pilot.press("ctrl+s")
        await pilot.press("n")
        await app.workers.wait_for_complete()
        await pilot.pause()

    _run(app, scenario)

    share.assert_called_once()
    assert app.exporting is False


def test_export_key_ignored_while_exporting_flag_set(products, make_routine, share):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine("share"), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("4")
        app.exporting = True
        await pilot.press("ctrl+s")
        await app.workers.wait_for_complete()
        share.assert_not_called()

        app.exporting = False
        await pilot.press("ctrl+s")
        await app.workers.wait_for_complete()
        await pilot.pause()

    _run(app, scenario)

    share.assert_called_once()


def test_customer_modal_notes_accept_new_lines(products, make_routine):
    app = OrderFormApp(catalog_loader=lambda: list(products), routine=make_routine(), ask_location=False)

    async def scenario(pilot):
        await app.workers.wait_for_complete()
        await pilot.press("c")
        await _wait_for_screen(pilot, CustomerModal)
        await pilot.press("ctrl+n", "tab", "tab", "a", "ctrl+n", "b", "enter")
        await pilot.pause()

    _run(app, scenario)

    assert app.form.customer == CustomerInfo(store="", vat="", notes="a\nb")
