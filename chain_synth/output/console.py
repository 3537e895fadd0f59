"""Console output formatter for chain snapshots and order tickets."""

from ..chain.assembler import filter_chain_view
from ..chain.expirations import format_expiry_label, format_expiry_short
from ..models.order import OrderSpec, RiskProfile
from ..models.quote import OptionsChainSnapshot


def format_money(value: float | None, unbounded: bool = False) -> str:
    """Dollar amount with thousands separators, or 'Unlimited'."""
    if unbounded or value is None:
        return "Unlimited"
    return f"${value:,.2f}"


def print_header(symbol: str, spot: float, change_24h: float | None = None, fallback: bool = False):
    """Print chain session header.

    Args:
        symbol: Underlying symbol
        spot: Spot price used for the chain
        change_24h: Optional 24h % change
        fallback: True when spot is the built-in fallback
    """
    print("\n" + "=" * 80)
    print(f"  OPTIONS CHAIN - {symbol}")
    change_str = f"  ({change_24h:+.2f}% 24h)" if change_24h is not None else ""
    source = "  [fallback price]" if fallback else ""
    print(f"  Spot Price: ${spot:,.4f}{change_str}{source}")
    print("=" * 80)


def print_expirations(snapshot: OptionsChainSnapshot):
    """Print the expiration list with base IVs."""
    print("\nExpirations:")
    for expiry in snapshot.expirations:
        base_iv = snapshot.base_ivs.get(expiry)
        iv_str = f"base IV {base_iv:.1f}%" if base_iv is not None else ""
        print(f"  {expiry}  {format_expiry_label(expiry):>13}  {format_expiry_short(expiry):>8}  {iv_str}")


def print_chain(snapshot: OptionsChainSnapshot, expiry: str | None = None, view: str = "all"):
    """Print one expiration of the chain as a table.

    Args:
        snapshot: OptionsChainSnapshot to display
        expiry: Expiration to show (defaults to the nearest)
        view: 'all', 'calls' or 'puts'

    Output format:
        Calls on the left of the strike column, puts on the right; the
        at-the-money strike is marked with '*'.
    """
    expiry = expiry or snapshot.default_expiry
    rows = snapshot.rows(expiry) if expiry else ()
    if not rows:
        print(f"No strikes listed for expiration {expiry}.")
        return

    atm = snapshot.atm_strike(expiry)
    show_calls = view in ("all", "calls")
    show_puts = view in ("all", "puts")

    print(f"\n{format_expiry_label(expiry)} ({format_expiry_short(expiry)})")
    side_header = f"{'Bid':>7} {'Ask':>7} {'IV':>5} {'Δ':>5} {'Vol':>4} {'OI':>5}"
    header = ""
    if show_calls:
        header += f"{'CALLS':^38} "
    header += f"{'Strike':^11}"
    if show_puts:
        header += f" {'PUTS':^38}"
    print(header)

    columns = ""
    if show_calls:
        columns += side_header + " "
    columns += " " * 11
    if show_puts:
        columns += " " + side_header
    print(columns)
    print("-" * len(columns))

    for entry in filter_chain_view(rows, view):
        strike = entry["strike"]
        marker = "*" if strike == atm else " "
        line = ""
        if show_calls:
            q = entry["call"]
            line += (f"{q.bid:>7.2f} {q.ask:>7.2f} {q.iv:>5.1f} {q.delta:>5.2f} "
                     f"{q.volume:>4} {q.open_interest:>5} ")
        line += f"{strike:>10.3f}{marker}"
        if show_puts:
            q = entry["put"]
            line += (f" {q.bid:>7.2f} {q.ask:>7.2f} {q.iv:>5.1f} {q.delta:>5.2f} "
                     f"{q.volume:>4} {q.open_interest:>5}")
        print(line)

    print("-" * len(columns))


def print_order_ticket(order: OrderSpec, expiry: str, risk: RiskProfile | None):
    """Print estimated cost and payoff bounds for an order.

    Args:
        order: Order ticket
        expiry: Expiration of the selected contract
        risk: RiskProfile, or None when there is nothing to show
    """
    print(f"\nOrder: {order.order_side.upper()} {order.quantity:g} x "
          f"{format_expiry_label(expiry)} {order.strike:g} {order.side.upper()} "
          f"({order.order_type})")

    if risk is None:
        print("  Select a contract and enter a quantity to see cost and risk.")
        return

    print(f"\nEst. cost:")
    print(f"  Price:            ${risk.effective_price:.2f}")
    print(f"  Premium:          {format_money(risk.premium)}")
    print(f"  Est. reg. fee:    {format_money(risk.reg_fee)}")
    print(f"  Exchange fee:     {format_money(risk.exchange_fee)}")
    print(f"  Contract fee:     {format_money(risk.contract_fee)}")
    print(f"  Total:            {format_money(risk.total)}")

    print(f"\nAt expiration:")
    print(f"  Max Profit:       {format_money(risk.max_profit, risk.max_profit_unbounded)}")
    print(f"  Breakeven:        ${risk.breakeven:,.3f}")
    print(f"  Max Loss:         {format_money(risk.max_loss, risk.max_loss_unbounded)}")
