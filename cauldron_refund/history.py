"""Weekly bribe pool history across Thursday epochs."""

import sys
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

from tqdm import tqdm

from cauldron_refund.blocks import block_timestamp, iter_weekly_epochs, latest_block_number, locate_block
from cauldron_refund.engine import RefundEngine
from cauldron_refund.errors import ReadFailure
from cauldron_refund.models import WeeklyBribeSnapshot

if TYPE_CHECKING:
    from web3 import Web3  # pragma: no cover


def collect_bribe_history(
    engine: RefundEngine, w3: "Web3", since: str | date | datetime
) -> list[WeeklyBribeSnapshot]:
    """
    Read the bribe pool at the first block of every weekly epoch after `since`.

    The pool is always read from the bribe contract, even when the engine is
    configured with a fixed weekly bribe. Weeks whose reads fail are reported on
    stderr and skipped.
    """
    latest = latest_block_number(w3)
    latest_ts = datetime.fromtimestamp(block_timestamp(w3, latest), tz=timezone.utc)
    epochs = list(iter_weekly_epochs(since, latest_ts))

    out: list[WeeklyBribeSnapshot] = []
    with tqdm(epochs, desc="📜 Reading weekly bribes", unit="week", file=sys.stderr) as pbar:
        for epoch in pbar:
            pbar.set_postfix(epoch=epoch.strftime("%Y-%m-%d"))
            try:
                block = locate_block(w3, int(epoch.timestamp()), latest_block=latest)
                pool = engine.at_block(block).get_onchain_bribe_pool()
            except ReadFailure as ex:
                tqdm.write(f"⚠️  {epoch:%Y-%m-%d}: skipped, {ex}", file=sys.stderr)
                continue
            out.append(
                WeeklyBribeSnapshot(
                    epoch=epoch,
                    block_number=block,
                    rewards_accrued=pool.rewards_accrued,
                    rewards_claimed=pool.rewards_claimed,
                )
            )
    return out
