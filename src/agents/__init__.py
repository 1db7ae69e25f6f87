from src.agents.stock_agent import StockAgent

__all__ = [
    "StockAgent",
]
