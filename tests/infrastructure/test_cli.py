"""End-to-end tests of the click CLI against a temporary data directory."""

import logging
import os
import re
import subprocess
import sys

import pytest
from click.testing import CliRunner

from orderproc.domain.model.inventory import InventoryItem
from orderproc.infrastructure import bootstrap
from orderproc.infrastructure.cli.main import cli
from orderproc.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)

ORDER_ID = re.compile(r"^Order (\S+)  \(status=", re.MULTILINE)


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("ORDERPROC_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ORDERPROC_PAYMENT_OUTCOME", "completed")
    monkeypatch.setenv("ORDERPROC_LOG_LEVEL", "WARNING")
    bootstrap.reset()

    # The CLI reconfigures the root logger; put it back afterwards.
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    yield CliRunner()

    root.handlers = saved_handlers
    root.setLevel(saved_level)
    bootstrap.reset()


def _create_order(runner, items="PROD001:2:10.0", total="20.0"):
    result = runner.invoke(
        cli, ["order", "create", "--customer", "customer123", "--items", items, "--total", total]
    )
    assert result.exit_code == 0, result.output
    return ORDER_ID.search(result.output).group(1)


class TestInventoryCommands:

    def test_show_seeded_inventory(self, runner):
        result = runner.invoke(cli, ["inventory", "show"])

        assert result.exit_code == 0, result.output
        assert "PROD001" in result.output
        assert "PROD003" in result.output

    def test_show_unknown_product(self, runner):
        result = runner.invoke(cli, ["inventory", "show", "--product", "PROD999"])

        assert result.exit_code == 1
        assert "PROD999 not found" in result.output

    def test_reserve_and_release(self, runner):
        reserved = runner.invoke(
            cli, ["inventory", "reserve", "--product", "PROD002", "--quantity", "5"]
        )
        released = runner.invoke(
            cli, ["inventory", "release", "--product", "PROD002", "--quantity", "5"]
        )

        assert reserved.exit_code == 0, reserved.output
        assert "Reserved 5 of PROD002." in reserved.output
        assert released.exit_code == 0, released.output
        assert "Released 5 of PROD002." in released.output

    def test_reserve_too_much(self, runner):
        result = runner.invoke(
            cli, ["inventory", "reserve", "--product", "PROD003", "--quantity", "26"]
        )
        assert result.exit_code == 1
        assert "Insufficient available quantity" in result.output


class TestOrderCommands:

    def test_create_and_show(self, runner):
        order_id = _create_order(runner)

        shown = runner.invoke(cli, ["order", "show", "--id", order_id])
        stock = runner.invoke(cli, ["inventory", "show", "--product", "PROD001"])

        assert shown.exit_code == 0, shown.output
        assert "status=Pending" in shown.output
        assert "20.00" in shown.output
        assert re.search(r"PROD001\s+98\s+2", stock.output)

    def test_create_with_total_mismatch(self, runner):
        result = runner.invoke(
            cli,
            ["order", "create", "--customer", "c1", "--items", "PROD001:2:10.0", "--total", "21.0"],
        )
        assert result.exit_code == 1
        assert "does not match" in result.output

    def test_create_with_malformed_items(self, runner):
        result = runner.invoke(
            cli, ["order", "create", "--customer", "c1", "--items", "PROD001-2", "--total", "1"]
        )
        assert result.exit_code == 2
        assert "Invalid item format" in result.output

    def test_list_orders(self, runner):
        assert "No orders found." in runner.invoke(cli, ["order", "list"]).output

        order_id = _create_order(runner)
        result = runner.invoke(cli, ["order", "list"])

        assert result.exit_code == 0, result.output
        assert order_id in result.output

    def test_update_status(self, runner):
        order_id = _create_order(runner)

        result = runner.invoke(cli, ["order", "status", "--id", order_id, "--status", "Shipped"])

        assert result.exit_code == 0, result.output
        assert f"Order {order_id} status updated to Shipped." in result.output

    def test_update_status_rejects_unknown_status(self, runner):
        order_id = _create_order(runner)

        result = runner.invoke(cli, ["order", "status", "--id", order_id, "--status", "Bogus"])

        assert result.exit_code == 1
        assert "Invalid status value" in result.output

    def test_cancel_releases_when_configured(self, runner, monkeypatch):
        monkeypatch.setenv("ORDERPROC_RELEASE_ON_CANCEL", "true")
        bootstrap.reset()
        order_id = _create_order(runner)

        runner.invoke(cli, ["order", "status", "--id", order_id, "--status", "Cancelled"])
        stock = runner.invoke(cli, ["inventory", "show", "--product", "PROD001"])

        assert re.search(r"PROD001\s+100\s+0", stock.output)


class TestPaymentCommands:

    def test_successful_payment(self, runner):
        order_id = _create_order(runner)

        result = runner.invoke(
            cli, ["payment", "process", "--order", order_id, "--amount", "20.00", "--method", "CreditCard"]
        )

        assert result.exit_code == 0, result.output
        assert "Payment processed successfully." in result.output
        txn_id = re.search(r"Transaction: (\S+)", result.output).group(1)

        status = runner.invoke(cli, ["payment", "status", "--id", txn_id])
        assert status.exit_code == 0, status.output
        assert "Completed" in status.output

    def test_declined_payment_exits_nonzero(self, runner, monkeypatch):
        monkeypatch.setenv("ORDERPROC_PAYMENT_OUTCOME", "failed")
        bootstrap.reset()
        order_id = _create_order(runner)

        result = runner.invoke(
            cli, ["payment", "process", "--order", order_id, "--amount", "20", "--method", "PayPal"]
        )

        assert result.exit_code == 1
        assert "Payment failed. Please try again." in result.output

    def test_rejected_method(self, runner):
        order_id = _create_order(runner)

        result = runner.invoke(
            cli, ["payment", "process", "--order", order_id, "--amount", "20", "--method", "Cash"]
        )

        assert result.exit_code == 1
        assert "not accepted" in result.output

    def test_unknown_transaction(self, runner):
        result = runner.invoke(cli, ["payment", "status", "--id", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestConcurrentProcesses:

    def test_parallel_reserves_share_one_inventory_file(self, tmp_path):
        repo = JsonInventoryRepository(tmp_path / "inventory.json")
        repo.save(InventoryItem("PROD003", 5))
        env = dict(
            os.environ,
            ORDERPROC_DATA_DIR=str(tmp_path),
            ORDERPROC_LOG_LEVEL="WARNING",
            PYTHONPATH=os.pathsep.join(p for p in sys.path if p),
        )
        command = [
            sys.executable, "-c",
            "from orderproc.infrastructure.cli.main import cli; cli()",
            "inventory", "reserve", "--product", "PROD003", "--quantity", "1",
        ]

        procs = [
            subprocess.Popen(
                command, cwd=tmp_path, env=env, text=True,
                stdout=subprocess.PIPE, stderr=subprocess.PIPE,
            )
            for _ in range(12)
        ]
        outcomes = []
        for p in procs:
            _, err = p.communicate(timeout=120)
            outcomes.append((p.returncode, err))

        assert [code for code, _ in outcomes].count(0) == 5
        assert all(
            "Insufficient available quantity" in err for code, err in outcomes if code != 0
        )
        assert repo.get_by_product_id("PROD003") == InventoryItem("PROD003", 0, 5)
