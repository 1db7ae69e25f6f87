"""
Stock Data MCP Server

Provides tools for parsing pasted stock text, checking thresholds and reading
the stock log through the shared key-value store.
"""

import json
import os
import sys
from datetime import datetime
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
import env_loader  # noqa: F401
import urllib3
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

from typing import Dict, List
from mcp.server import Server
from mcp.types import Tool, TextContent

from src.agents.stock_agent import StockAgent
from src.engine.classifier import detect_location, detect_section
from src.engine.logbook import day_entries, item_trend, stock_alerts_for_day, transfers_on
from src.engine.parser import parse_stock
from src.engine.thresholds import check_low_stock
from src.models.stock import StockItem, date_key
from src.storage import create_store

app = Server("stock-data")

_agent = None


def _get_agent() -> StockAgent:
    """Agent'i ilk kullanimda yukler."""
    global _agent
    if _agent is None:
        _agent = StockAgent(create_store())
        _agent.load()
        _agent.start_sync()
    return _agent


def _result(data):
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False, default=str))]


def _item(item: StockItem) -> Dict:
    return {"name": item.name, "quantity": item.quantity, "unit": item.unit}


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name="parse_stock", description="Parse pasted stock text into items",
             inputSchema={"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]}),
        Tool(name="detect_section", description="Detect section and location of a message",
             inputSchema={"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]}),
        Tool(name="check_low_stock", description="Flag parsed items at or below their threshold",
             inputSchema={"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]}),
        Tool(name="send_message", description="Send a chat message as a staff member and persist any stock update",
             inputSchema={"type": "object", "properties": {"staff_id": {"type": "string"}, "text": {"type": "string"}}, "required": ["staff_id", "text"]}),
        Tool(name="get_snapshot", description="Latest stock per location and section",
             inputSchema={"type": "object", "properties": {}}),
        Tool(name="get_day_report", description="Out-of-stock and low items logged on a date (YYYY-MM-DD)",
             inputSchema={"type": "object", "properties": {"date": {"type": "string"}}}),
        Tool(name="get_day_log", description="Stock log entries of a date (YYYY-MM-DD), optionally filtered by section or location",
             inputSchema={"type": "object", "properties": {"date": {"type": "string"}, "section": {"type": "string"}, "location": {"type": "string"}}}),
        Tool(name="get_day_transfers", description="Transfers sent on a date (YYYY-MM-DD)",
             inputSchema={"type": "object", "properties": {"date": {"type": "string"}}}),
        Tool(name="get_item_trend", description="Quantity trend of an item over the last 30 logged days",
             inputSchema={"type": "object", "properties": {"name": {"type": "string"}}, "required": ["name"]}),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> List[TextContent]:
    handlers = {
        "parse_stock": lambda a: parse_stock_tool(a["text"]),
        "detect_section": lambda a: detect_section_tool(a["text"]),
        "check_low_stock": lambda a: check_low_stock_tool(a["text"]),
        "send_message": lambda a: send_message(a["staff_id"], a["text"]),
        "get_snapshot": lambda a: get_snapshot(),
        "get_day_report": lambda a: get_day_report(a.get("date")),
        "get_day_log": lambda a: get_day_log(a.get("date"), a.get("section"), a.get("location")),
        "get_day_transfers": lambda a: get_day_transfers(a.get("date")),
        "get_item_trend": lambda a: get_item_trend(a["name"]),
    }
    handler = handlers.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")
    return _result(handler(arguments))


# --- Implementation ---

def parse_stock_tool(text: str) -> Dict:
    items = parse_stock(text)
    return {"success": True, "count": len(items), "data": [_item(i) for i in items]}


def detect_section_tool(text: str) -> Dict:
    return {"success": True, "section": detect_section(text), "location": detect_location(text)}


def check_low_stock_tool(text: str) -> Dict:
    try:
        agent = _get_agent()
        flagged = check_low_stock(parse_stock(text), agent.thresholds)
        data = [
            {"name": f.name, "quantity": f.quantity, "threshold": f.threshold, "severity": f.severity.value}
            for f in flagged
        ]
        return {"success": True, "count": len(data), "data": data}
    except Exception as e:
        return {"success": False, "error": str(e)}


def send_message(staff_id: str, text: str) -> Dict:
    try:
        agent = _get_agent()
        user = agent.config.find_staff(staff_id)
        if user is None:
            return {"success": False, "error": f"Unknown staff: {staff_id}"}
        response = agent.send(user, text)
        if response is None:
            return {"success": False, "error": "Empty message"}
        return {
            "success": True,
            "type": response.type.value,
            "intent": response.intent.value,
            "text": response.text,
            "is_stock_update": response.is_stock_update,
            "is_transfer": response.is_transfer,
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


def get_snapshot() -> Dict:
    try:
        agent = _get_agent()
        data = {
            location: {section: [_item(i) for i in items] for section, items in sections.items()}
            for location, sections in agent.snapshot.items()
        }
        return {"success": True, "data": data}
    except Exception as e:
        return {"success": False, "error": str(e)}


def get_day_report(date: str = None) -> Dict:
    try:
        agent = _get_agent()
        day = date or date_key(datetime.now())
        oos, low = stock_alerts_for_day(agent.logs, day, agent.thresholds)
        return {
            "success": True,
            "date": day,
            "out_of_stock": [{**_item(a.item), "section": a.section, "location": a.location, "staff": a.staff_name} for a in oos],
            "low": [{**_item(a.item), "threshold": a.threshold, "section": a.section, "location": a.location} for a in low],
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


def get_day_log(date: str = None, section: str = None, location: str = None) -> Dict:
    try:
        agent = _get_agent()
        day = date or date_key(datetime.now())
        entries = day_entries(agent.logs, day, section=section, location=location)
        data = [
            {
                "time": e.time,
                "staff": e.staff_name,
                "section": e.section,
                "location": e.location,
                "items": [_item(i) for i in e.items],
            }
            for e in entries
        ]
        return {"success": True, "date": day, "count": len(data), "data": data}
    except Exception as e:
        return {"success": False, "error": str(e)}


def get_day_transfers(date: str = None) -> Dict:
    try:
        agent = _get_agent()
        day = date or date_key(datetime.now())
        records = transfers_on(agent.transfers, day)
        data = [
            {"time": t.time, "staff": t.staff_name, "to_location": t.to_location, "items": [_item(i) for i in t.items]}
            for t in records
        ]
        return {"success": True, "date": day, "count": len(data), "data": data}
    except Exception as e:
        return {"success": False, "error": str(e)}


def get_item_trend(name: str) -> Dict:
    try:
        agent = _get_agent()
        points = item_trend(agent.logs, name, datetime.now())
        return {"success": True, "count": len(points), "data": [p.__dict__ for p in points]}
    except Exception as e:
        return {"success": False, "error": str(e)}


if __name__ == "__main__":
    import asyncio
    from mcp.server.stdio import stdio_server

    async def run():
        async with stdio_server() as (read, write):
            await app.run(read, write, app.create_initialization_options())

    asyncio.run(run())
