"""Terminal sohbet arayüzü unit testleri."""

from datetime import datetime

import pytest

from chat import handle_command, read_message
from src.agents.stock_agent import StockAgent
from src.storage.memory_store import MemoryStore

NOW = datetime(2026, 10, 19, 9, 30)


def _create_agent() -> StockAgent:
    agent = StockAgent(MemoryStore(), clock=lambda: NOW)
    agent.load()
    return agent


def _feed(lines):
    """Sırayla verilen satırları döndüren sahte input fonksiyonu."""
    queue = list(lines)

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    return fake_input


class TestReadMessage:
    def test_header_paste_kept_together(self):
        fake_input = _feed(["Cool Room", "Dal: 4", "Fish: 5", ""])
        assert read_message(fake_input) == "Cool Room\nDal: 4\nFish: 5"

    def test_header_paste_logged_under_section(self):
        agent = _create_agent()
        fake_input = _feed(["Cool Room", "Dal: 4", "Fish: 5", ""])
        agent.send(agent.config.find_staff("sapna"), read_message(fake_input))
        assert [e.section for e in agent.logs["2026-10-19"]] == ["Cool Room"]

    def test_single_line_command(self):
        fake_input = _feed(["Low stock", "", "Orders", ""])
        assert read_message(fake_input) == "Low stock"
        assert read_message(fake_input) == "Orders"

    def test_eof_after_lines_returns_message(self):
        assert read_message(_feed(["Dal: 4", "Fish: 5"])) == "Dal: 4\nFish: 5"

    def test_eof_without_lines_raises(self):
        with pytest.raises(EOFError):
            read_message(_feed([]))


class TestHandleCommand:
    def test_multi_line_paste_goes_to_router(self):
        agent = _create_agent()
        assert handle_command("Staff meal: 2\nRice: 3", agent) is None

    def test_logbook_lists_day_entries(self):
        agent = _create_agent()
        user = agent.config.find_staff("sapna")
        agent.send(user, "Cool Room\nDal: 1\nButter Sauce: 0")
        agent.send(user, "Dairy\nMilk: 4 litre\nPaneer: 3")

        text = handle_command("logbook", agent)
        assert "09:30 Sapna — Vic Park (Cool Room)" in text
        assert "• Milk: 4 litre" in text
        assert "Stok disi (1)" in text

        filtered = handle_command("logbook 2026-10-19 Dairy", agent)
        assert "(Dairy)" in filtered
        assert "Sapna — Vic Park (Cool Room)" not in filtered

    def test_logbook_other_day(self):
        agent = _create_agent()
        agent.send(agent.config.find_staff("sapna"), "Cool Room\nDal: 1\nFish: 5")
        text = handle_command("logbook 2026-10-18", agent)
        assert "📅 2026-10-18" in text
        assert "Cool Room" not in text

    def test_transfers_for_day(self):
        agent = _create_agent()
        agent.send(agent.config.find_staff("veer"), "Sent to nedlands\nDal: 2\nRice: 3 kg")
        text = handle_command("transfers", agent)
        assert "Veer → Nedlands: Dal 2, Rice 3 kg" in text
        assert handle_command("transfers 2026-10-18", agent) == "🚚 2026-10-18 icin transfer yok"

    def test_threshold_rejects_nan(self):
        agent = _create_agent()
        assert handle_command("threshold Dal nan", agent).startswith("❌")
        assert "Dal" not in agent.thresholds
