"""
Stok takip sohbet arayuzu (terminal).

Personel adini sec, stok listesini yapistir, asistan kaydeder ve uyarir.
Kullanim:
    python chat.py
    STOCK_STORE=memory python chat.py   # AWS olmadan
"""

import logging
import re
import sys

import env_loader  # noqa: F401
import urllib3
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

from src.agents.stock_agent import StockAgent
from src.engine.logbook import (
    day_entries,
    item_trend,
    log_totals,
    staff_status,
    stock_alerts_for_day,
    transfers_on,
)
from src.engine.thresholds import ConfigurationError
from src.models.stock import date_key, format_quantity
from src.storage import create_store

# Logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")
logger = logging.getLogger("chat")
logging.getLogger("botocore").setLevel(logging.WARNING)


HELP_TEXT = """
==========================================================
  🍛 Sizzle n Sambar - Daily Stock Tracker
----------------------------------------------------------
  Mesaji yaz veya stok listesini yapistir, bos satirla gonder:
    "Low stock", "Orders", "Summary", "Show cool room stock"

  logbook [tarih] [bolum] - Gunun kayitlari, stok disi / dusuk listesi
  transfers [tarih]    - Gunun transferleri
  trend <urun>         - Son 30 gunluk urun trendi
  staff                - Bugun kim kayit girdi
  threshold <urun> <n> - Urun esigini ayarla
  yardim               - Bu menuyu goster
  cikis / exit         - Cikis
==========================================================
"""


# ============================================================
# Giris ve komut isleyiciler
# ============================================================

def pick_user(agent):
    print("\n👥 Personel secin:")
    for i, staff in enumerate(agent.config.staff, 1):
        print(f"  {i}. {staff.avatar} {staff.name}  ({' · '.join(staff.sections)})")
    while True:
        choice = input("\nNumara: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(agent.config.staff):
            return agent.config.staff[int(choice) - 1]
        print("❌ Gecersiz secim")


def read_message(input_fn=input):
    """Bos satira kadar okur; tek satirlik komutlar da bos Enter ile gonderilir."""
    lines = []
    prompt = "\n🧑 Sen: "
    while True:
        try:
            line = input_fn(prompt).rstrip()
        except EOFError:
            if lines:
                break
            raise
        if not line:
            break
        lines.append(line)
        prompt = "... "
    return "\n".join(lines)


DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def handle_command(cmd, agent):
    """Sadece log book ve yonetim komutlari - geri kalan her sey router'a gider."""
    if "\n" in cmd.strip():
        return None
    parts = cmd.strip().split()
    if not parts:
        return None
    action = parts[0].lower()
    now = agent.now()
    today = date_key(now)

    if action == "logbook":
        args = parts[1:]
        day = args.pop(0) if args and DATE_RE.match(args[0]) else today
        section = " ".join(args) or None
        days, entries = log_totals(agent.logs)
        lines = [f"📒 Log Book: {days} gun · {entries} kayit", f"\n📅 {day}" + (f" · {section}" if section else "")]
        for entry in day_entries(agent.logs, day, section=section):
            lines.append(f"  {entry.time} {entry.staff_name} — {entry.location} ({entry.section})")
            lines += [f"    • {item.name}: {item.label()}" for item in entry.items]
        oos, low = stock_alerts_for_day(agent.logs, day, agent.thresholds)
        lines.append(f"\n🔴 Stok disi ({len(oos)}):")
        lines += [f"  • {a.item.name} — {a.location} ({a.section}) · {a.staff_name} {a.time}" for a in oos]
        lines.append(f"\n🟡 Dusuk ({len(low)}):")
        lines += [
            f"  • {a.item.name}: {a.item.label()} [min:{format_quantity(a.threshold)}] — {a.location}"
            for a in low
        ]
        return "\n".join(lines)

    if action == "transfers":
        day = parts[1] if len(parts) >= 2 and DATE_RE.match(parts[1]) else today
        records = transfers_on(agent.transfers, day)
        if not records:
            return f"🚚 {day} icin transfer yok"
        lines = [f"🚚 {day} transferleri ({len(records)}):"]
        for record in records:
            items = ", ".join(f"{i.name} {i.label()}" for i in record.items)
            lines.append(f"  {record.time} {record.staff_name} → {record.to_location}: {items}")
        return "\n".join(lines)

    if action == "trend" and len(parts) >= 2:
        name = " ".join(parts[1:])
        points = item_trend(agent.logs, name, now)
        if not points:
            return f"📈 {name} icin kayit yok"
        return "\n".join([f"📈 {name}"] + [f"  {p.date}: {format_quantity(p.quantity)} {p.unit} ({p.location})" for p in points])

    if action == "staff":
        lines = ["👥 Bugun:"]
        for status in staff_status(agent.logs, today, agent.config.staff):
            mark = "✅" if status.logged else "⏳"
            lines.append(f"  {mark} {status.staff.name}: {status.logged} kayit")
        return "\n".join(lines)

    if action == "threshold" and len(parts) >= 3:
        try:
            value = float(parts[-1])
            agent.set_threshold(" ".join(parts[1:-1]), value)
        except ValueError as e:
            return f"❌ {e}"
        return f"✅ Esik kaydedildi: {' '.join(parts[1:-1])} = {format_quantity(value)}"

    return None


# ============================================================
# Main
# ============================================================

def main():
    print("🍛 Sizzle n Sambar - Stok Takip")
    print("=" * 58)

    try:
        store = create_store()
        agent = StockAgent(store)
        agent.load()
        agent.start_sync()
    except ConfigurationError as e:
        print(f"❌ Yapilandirma hatasi: {e}")
        sys.exit(1)

    user = pick_user(agent)
    print(f"\n🤖 Agent: {agent.welcome(user)}")
    print(HELP_TEXT)

    try:
        while True:
            try:
                if hasattr(store, "poll"):
                    store.poll()
                user_input = read_message()
            except (EOFError, KeyboardInterrupt):
                print("\n👋 Gorusuruz!")
                break

            if not user_input.strip():
                continue

            if user_input.lower() in ("çıkış", "cikis", "exit", "quit", "q"):
                print("👋 Gorusuruz!")
                break

            if user_input.lower() in ("yardım", "yardim", "h"):
                print(HELP_TEXT)
                continue

            cmd_result = handle_command(user_input, agent)
            if cmd_result is not None:
                print(f"\n🤖 Agent: {cmd_result}")
                continue

            response = agent.send(user, user_input)
            if response is not None:
                print(f"\n🤖 Agent [{response.type.value}]: {response.text}")
    finally:
        agent.stop_sync()
        print("✅ Temiz cikis")


if __name__ == "__main__":
    main()
