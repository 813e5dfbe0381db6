"""
Betting Simulator — replays a spin history against a progressive stake ladder.

Stake management (shared by both policies):
- Stake = ladder[stake_index]
- On WIN: reset to step 0
- On LOSS: advance one step, capped at the last ladder entry
- Before each spin: if the balance cannot cover the stake, the run is BROKE
  and that spin is not played
- After each spin: a balance of zero or less is also BROKE

Policies:
- Rotating partition: back one class of the sequences or squares family,
  rotating 1 → 2 → 3 → 2 on every win. A win pays 2:1.
- Custom numbers: back the same N numbers every spin with an equal stake
  each. A win returns 36× the per-number stake minus everything staked.
"""

from config import (
    INITIAL_BANKROLL, DEFAULT_STAKE_LADDER, ROTATION_CYCLE,
    DOZEN_PAYOUT, STRAIGHT_RETURN,
)
from spin_analytics.analysis.settings import validate_family
from spin_analytics.analysis.wheel import PARTITIONS

SURVIVED = 'SURVIVED'
BROKE = 'BROKE'


class BettingState:
    """Mutable state of a single simulation run."""

    def __init__(self, initial_bankroll):
        self.initial_bankroll = initial_bankroll
        self.balance = initial_bankroll
        self.lowest_balance = initial_bankroll
        self.max_bet_used = 0
        self.stake_index = 0
        self.cycle_index = 0
        self.total_wins = 0
        self.total_losses = 0
        self.status = SURVIVED
        self.log = []

    @property
    def profit_loss(self):
        return self.balance - self.initial_bankroll

    @property
    def win_rate(self):
        total = self.total_wins + self.total_losses
        if total == 0:
            return 0.0
        return round(self.total_wins / total * 100, 1)

    def get_report(self):
        return {
            'initial_bankroll': self.initial_bankroll,
            'final_balance': self.balance,
            'lowest_balance': self.lowest_balance,
            'max_bet_used': self.max_bet_used,
            'total_spins': len(self.log),
            'total_wins': self.total_wins,
            'total_losses': self.total_losses,
            'win_rate': self.win_rate,
            'profit_loss': self.profit_loss,
            'status': self.status,
            'log': self.log,
        }


class BettingSimulator:
    def __init__(self, initial_bankroll=INITIAL_BANKROLL, stake_ladder=None):
        self.initial_bankroll = initial_bankroll
        self.stake_ladder = list(stake_ladder) if stake_ladder is not None else list(DEFAULT_STAKE_LADDER)

    def _run(self, spins, place_bet, on_win=None):
        """Drive the stake state machine over `spins`.

        Args:
            place_bet: (state, number) → (bet_target, total_stake, is_hit, win_profit)
            on_win: optional hook called with the state after a win
        """
        state = BettingState(self.initial_bankroll)
        last_step = len(self.stake_ladder) - 1

        for idx, num in enumerate(spins):
            bet_target, total_stake, is_hit, win_profit = place_bet(state, num)

            if state.balance < total_stake:
                state.status = BROKE
                break

            state.max_bet_used = max(state.max_bet_used, total_stake)

            if is_hit:
                result = 'WIN'
                profit = win_profit
                state.total_wins += 1
                state.stake_index = 0
                if on_win is not None:
                    on_win(state)
            else:
                result = 'LOSS'
                profit = -total_stake
                state.total_losses += 1
                state.stake_index = min(state.stake_index + 1, last_step)

            state.balance += profit
            state.lowest_balance = min(state.lowest_balance, state.balance)

            state.log.append({
                'spin_index': idx + 1,
                'number': num,
                'bet_target': bet_target,
                'bet_amount': total_stake,
                'result': result,
                'profit': profit,
                'balance_after': state.balance,
            })

            if state.balance <= 0:
                state.status = BROKE
                break

        return state

    def simulate_rotating(self, spins, family='sequences'):
        """Rotating 1 → 2 → 3 → 2 dozen-style bets over sequences or squares.

        Raises SettingsError for any other family.
        """
        family = validate_family(family)
        members = {c: set(nums) for c, nums in PARTITIONS[family].items()}
        cycle = ROTATION_CYCLE

        def place_bet(state, num):
            active = cycle[state.cycle_index]
            stake = self.stake_ladder[state.stake_index]
            return active, stake, num in members[active], DOZEN_PAYOUT * stake

        def advance_cycle(state):
            state.cycle_index = (state.cycle_index + 1) % len(cycle)

        report = self._run(spins, place_bet, on_win=advance_cycle).get_report()
        report['policy'] = 'rotating'
        report['family'] = family
        return report

    def simulate_custom(self, spins, numbers):
        """Straight-up bets on the same set of numbers every spin."""
        targets = tuple(numbers)
        target_set = set(targets)
        count = len(targets)

        if count == 0:
            report = BettingState(self.initial_bankroll).get_report()
        else:
            def place_bet(state, num):
                unit = self.stake_ladder[state.stake_index]
                total = unit * count
                return list(targets), total, num in target_set, STRAIGHT_RETURN * unit - total

            report = self._run(spins, place_bet).get_report()

        report['policy'] = 'custom'
        report['numbers'] = list(targets)
        return report
