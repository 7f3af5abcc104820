"""
Price trigger monitor for a buy/sell cycle.

The monitor keeps a band [trigger_price_down, trigger_price_up] around the
price. While waiting to BUY the band trails the price downwards, and a
rebound through the upper edge triggers the buy. While waiting to SELL the
band trails the price upwards, and a drop through the lower edge triggers
the sell. Each trigger flips the order type and re-centres the band on the
triggering price.
"""

from enum import Enum


class OrderType(Enum):
    """Side the monitor is currently waiting to execute."""

    BUY = "BUY"
    SELL = "SELL"

    def __str__(self) -> str:
        return self.value


class PriceMonitor:
    """
    Trailing limit / stop-loss trigger.

    Usage:
        monitor = PriceMonitor(OrderType.BUY, initial_price=100.0)
        monitor.update(101.5)
        if monitor.is_triggered:
            ...
    """

    def __init__(
        self,
        initial_order_type: OrderType,
        initial_price: float = 0.0,
        last_buy_price: float = 0.0,
        limit_percent: float = 0.5,
        stop_loss_percent: float = 1.0,
    ):
        """
        Initialize the monitor.

        Args:
            initial_order_type: Side to wait for first
            initial_price: Reference price when starting on BUY
            last_buy_price: Entry price when starting on SELL
            limit_percent: Take-profit distance in percent
            stop_loss_percent: Stop-loss distance in percent
        """
        self.limit_percent = limit_percent
        self.stop_loss_percent = stop_loss_percent
        self.is_triggered = False

        if initial_order_type is OrderType.BUY:
            self.current_order_type = OrderType.BUY
            self.last_buy_price = 0.0
            self.trigger_price_up = initial_price * (1 + limit_percent / 100)
            self.trigger_price_down = initial_price * (1 - limit_percent / 100)
        elif initial_order_type is OrderType.SELL:
            self.current_order_type = OrderType.SELL
            self.last_buy_price = last_buy_price
            self.trigger_price_up = last_buy_price * (1 + limit_percent / 100)
            self.trigger_price_down = last_buy_price * (1 - stop_loss_percent / 100)
        else:
            raise ValueError(f"Unknown order type: {initial_order_type!r}")

    def switch_order_type(self, order_type: OrderType, price: float) -> None:
        """Flip to ``order_type`` and re-centre the band on ``price``."""
        self.is_triggered = False

        if order_type is OrderType.SELL:
            self.current_order_type = OrderType.SELL
            self.last_buy_price = price
            self.trigger_price_up = price * (1 + self.limit_percent / 100)
            self.trigger_price_down = price * (1 - self.stop_loss_percent / 100)
        elif order_type is OrderType.BUY:
            self.current_order_type = OrderType.BUY
            self.last_buy_price = 0.0
            self.trigger_price_up = price * (1 + self.stop_loss_percent / 100)
            self.trigger_price_down = price * (1 - self.limit_percent / 100)
        else:
            raise ValueError(f"Unknown order type: {order_type!r}")

    def update(self, current_price: float) -> bool:
        """
        Feed a new price into the monitor.

        Args:
            current_price: Latest observed price

        Returns:
            True if this price triggered the pending order
        """
        triggered = False

        if self.current_order_type is OrderType.BUY:
            if current_price >= self.trigger_price_up:
                triggered = True
                self.switch_order_type(OrderType.SELL, current_price)
            else:
                self.trigger_price_down = min(
                    self.trigger_price_down,
                    current_price * (1 - self.limit_percent / 100),
                )
                self.trigger_price_up = min(
                    self.trigger_price_up,
                    current_price * (1 + self.stop_loss_percent / 100),
                )
        else:
            if current_price <= self.trigger_price_down:
                triggered = True
                self.switch_order_type(OrderType.BUY, current_price)
            else:
                self.trigger_price_up = max(
                    self.trigger_price_up,
                    current_price * (1 + self.limit_percent / 100),
                )
                self.trigger_price_down = max(
                    self.trigger_price_down,
                    current_price * (1 - self.stop_loss_percent / 100),
                )

        self.is_triggered = triggered
        return triggered
