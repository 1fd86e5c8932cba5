"""DSC engine: deposit, mint, redeem, burn and liquidate against collateral."""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from ..config import EngineConfig
from ..constants import ADDITIONAL_FEED_PRECISION, DEFAULT_ENGINE_ADDRESS, PRECISION
from ..errors import (
    HealthFactorNotImproved,
    HealthFactorOk,
    LiquidationTooSmall,
    MintFailed,
    NeedsMoreThanZero,
    NotAllowedToken,
    TokenError,
    TransferFailed,
)
from ..interfaces import Clock, CollateralToken, DebtToken, Journaled, PriceFeed
from ..models import AccountInformation, Event
from ..oracles import PriceOracleAdapter
from ..registry import CollateralRegistry
from .guard import ReentrancyGuard
from .health import HealthFactorCalculator
from .ledger import PositionLedger

logger = logging.getLogger(__name__)


class DSCEngine:
    """Collateralized-debt engine behind the DSC stable coin.

    Every mutating call is non-reentrant and all-or-nothing: the ledger and
    every journaled collaborator are snapshotted on entry and restored if
    anything raises. Collaborators that cannot be snapshotted are only
    called once every ledger change and health check has passed. After each
    call, every position with debt keeps a health factor of at least
    ``min_health_factor``.
    """

    def __init__(
        self,
        collateral_tokens: Sequence[CollateralToken],
        price_feeds: Sequence[PriceFeed],
        dsc: DebtToken,
        *,
        address: str = DEFAULT_ENGINE_ADDRESS,
        config: EngineConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._registry = CollateralRegistry(collateral_tokens, price_feeds)
        self._config = config or EngineConfig()
        self._dsc = dsc
        self.address = address

        self._ledger = PositionLedger(self._registry)
        self._oracle = PriceOracleAdapter(
            self._registry,
            staleness_timeout=self._config.staleness_timeout_seconds,
            clock=clock,
        )
        self._health = HealthFactorCalculator(
            self._registry, self._ledger, self._oracle, self._config
        )
        self._guard = ReentrancyGuard()

        participants: list[Journaled] = [self._ledger]
        for collaborator in [*(a.token for a in self._registry), dsc]:
            if isinstance(collaborator, Journaled) and not any(
                collaborator is p for p in participants
            ):
                participants.append(collaborator)
        self._journaled = tuple(participants)

        logger.info(
            "DSCEngine %s ready with collateral %s",
            self.address,
            ", ".join(self._registry.addresses),
        )

    # ------------------------------------------------------------------
    # Preconditions and transaction scope
    # ------------------------------------------------------------------

    @staticmethod
    def _require_more_than_zero(*amounts: int) -> None:
        for amount in amounts:
            if amount <= 0:
                raise NeedsMoreThanZero(amount)

    def _require_allowed_token(self, asset: str) -> None:
        if not self._registry.is_supported(asset):
            raise NotAllowedToken(asset)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        with self._guard.hold(operation):
            journal = [(p, p.snapshot()) for p in self._journaled]
            try:
                yield
            except Exception as e:
                for participant, state in reversed(journal):
                    participant.restore(state)
                logger.warning("%s reverted: %s", operation, e)
                raise

    # ------------------------------------------------------------------
    # Collaborator calls
    # ------------------------------------------------------------------

    def _transfer_in(self, token: CollateralToken, src: str, amount: int) -> None:
        try:
            success = token.transfer_from(self.address, src, self.address, amount)
        except TokenError as e:
            raise TransferFailed(str(e)) from e
        if not success:
            raise TransferFailed(f"transfer_from {src} of {amount} failed")

    def _transfer_out(self, token: CollateralToken, to: str, amount: int) -> None:
        try:
            success = token.transfer(self.address, to, amount)
        except TokenError as e:
            raise TransferFailed(str(e)) from e
        if not success:
            raise TransferFailed(f"transfer of {amount} to {to} failed")

    def _mint_to(self, to: str, amount: int) -> None:
        try:
            minted = self._dsc.mint(self.address, to, amount)
        except TokenError as e:
            raise MintFailed(str(e)) from e
        if not minted:
            raise MintFailed(f"mint of {amount} to {to} failed")

    def _pull_and_burn_dsc(self, src: str, amount: int) -> None:
        self._transfer_in(self._dsc, src, amount)
        self._dsc.burn(self.address, amount)

    def _token(self, asset: str) -> CollateralToken:
        return self._registry.get(asset).token

    # ------------------------------------------------------------------
    # Mutating operations
    #
    # Each one settles the ledger and runs every health check before the
    # first token call, so a rejected operation never reaches a
    # collaborator. Token calls pull from the caller before paying out.
    # ------------------------------------------------------------------

    def deposit_collateral(self, caller: str, asset: str, amount: int) -> None:
        self._require_more_than_zero(amount)
        self._require_allowed_token(asset)
        with self._transaction("deposit_collateral"):
            self._ledger.deposit(caller, asset, amount)
            self._transfer_in(self._token(asset), caller, amount)
        logger.info("%s deposited %s of %s", caller, amount, asset)

    def mint_dsc(self, caller: str, amount: int) -> None:
        """Mint ``amount`` DSC to ``caller`` if the position stays healthy."""
        self._require_more_than_zero(amount)
        with self._transaction("mint_dsc"):
            self._ledger.increase_debt(caller, amount)
            self._health.assert_healthy(caller)
            self._mint_to(caller, amount)
        logger.info("%s minted %s DSC", caller, amount)

    def deposit_collateral_and_mint_dsc(
        self, caller: str, asset: str, collateral_amount: int, debt_amount: int
    ) -> None:
        self._require_more_than_zero(collateral_amount, debt_amount)
        self._require_allowed_token(asset)
        with self._transaction("deposit_collateral_and_mint_dsc"):
            self._ledger.deposit(caller, asset, collateral_amount)
            self._ledger.increase_debt(caller, debt_amount)
            self._health.assert_healthy(caller)

            self._transfer_in(self._token(asset), caller, collateral_amount)
            self._mint_to(caller, debt_amount)
        logger.info(
            "%s deposited %s of %s and minted %s DSC",
            caller,
            collateral_amount,
            asset,
            debt_amount,
        )

    def redeem_collateral(self, caller: str, asset: str, amount: int) -> None:
        self._require_more_than_zero(amount)
        self._require_allowed_token(asset)
        with self._transaction("redeem_collateral"):
            self._ledger.withdraw(asset, amount, caller, caller)
            self._health.assert_healthy(caller)

            self._transfer_out(self._token(asset), caller, amount)
        logger.info("%s redeemed %s of %s", caller, amount, asset)

    def burn_dsc(self, caller: str, amount: int) -> None:
        self._require_more_than_zero(amount)
        with self._transaction("burn_dsc"):
            self._ledger.decrease_debt(caller, amount)
            # Burning only lowers debt; kept so future steps cannot skip the check.
            self._health.assert_healthy(caller)

            self._pull_and_burn_dsc(caller, amount)
        logger.info("%s burned %s DSC", caller, amount)

    def redeem_collateral_for_dsc(
        self, caller: str, asset: str, collateral_amount: int, debt_amount: int
    ) -> None:
        """Burn DSC, then redeem collateral against the reduced debt."""
        self._require_more_than_zero(collateral_amount, debt_amount)
        self._require_allowed_token(asset)
        with self._transaction("redeem_collateral_for_dsc"):
            self._ledger.decrease_debt(caller, debt_amount)
            self._ledger.withdraw(asset, collateral_amount, caller, caller)
            self._health.assert_healthy(caller)

            self._pull_and_burn_dsc(caller, debt_amount)
            self._transfer_out(self._token(asset), caller, collateral_amount)
        logger.info(
            "%s burned %s DSC and redeemed %s of %s",
            caller,
            debt_amount,
            collateral_amount,
            asset,
        )

    def liquidate(
        self, liquidator: str, asset: str, user: str, debt_to_cover: int
    ) -> None:
        """Repay ``debt_to_cover`` of ``user``'s debt for their collateral plus a bonus.

        The liquidator receives ``asset`` worth ``debt_to_cover`` plus
        ``liquidation_bonus`` percent, and pays with their own DSC. Partial
        liquidation is allowed, but the user's health factor must strictly
        improve.

        Raises:
            HealthFactorOk: ``user`` is not below the minimum health factor.
            LiquidationTooSmall: ``debt_to_cover`` is worth less than one
                base unit of ``asset``.
            HealthFactorNotImproved: the repayment left ``user`` no healthier.
            InsufficientBalance: ``user`` holds too little ``asset`` to pay
                the covered amount plus bonus.
        """
        self._require_more_than_zero(debt_to_cover)
        self._require_allowed_token(asset)
        with self._transaction("liquidate"):
            starting = self._health.health_factor(user)
            if starting >= self._config.min_health_factor:
                raise HealthFactorOk(user, starting)

            token_amount = self._oracle.asset_amount_for_usd(asset, debt_to_cover)
            if token_amount == 0:
                raise LiquidationTooSmall(asset, debt_to_cover)
            bonus = (
                token_amount
                * self._config.liquidation_bonus
                // self._config.liquidation_precision
            )
            seized = token_amount + bonus

            self._ledger.withdraw(asset, seized, user, liquidator)
            self._ledger.decrease_debt(user, debt_to_cover)
            ending = self._health.health_factor(user)
            if ending <= starting:
                raise HealthFactorNotImproved(starting, ending)
            self._health.assert_healthy(liquidator)

            self._pull_and_burn_dsc(liquidator, debt_to_cover)
            self._transfer_out(self._token(asset), liquidator, seized)

        logger.info(
            "%s liquidated %s DSC of %s for %s of %s (bonus %s)",
            liquidator,
            debt_to_cover,
            user,
            seized,
            asset,
            bonus,
        )

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_account_information(self, user: str) -> AccountInformation:
        return AccountInformation(
            total_debt=self._ledger.debt_of(user),
            collateral_value_usd=self._health.collateral_value_usd(user),
        )

    def get_account_collateral_value(self, user: str) -> int:
        return self._health.collateral_value_usd(user)

    def get_usd_value(self, asset: str, amount: int) -> int:
        return self._oracle.usd_value(asset, amount)

    def get_token_amount_from_usd(self, asset: str, usd_amount: int) -> int:
        return self._oracle.asset_amount_for_usd(asset, usd_amount)

    def get_health_factor(self, user: str) -> int:
        return self._health.health_factor(user)

    def calculate_health_factor(self, total_debt: int, collateral_value_usd: int) -> int:
        return self._health.calculate(total_debt, collateral_value_usd)

    def get_collateral_tokens(self) -> tuple[str, ...]:
        return self._registry.addresses

    def get_collateral_balance_of_user(self, user: str, asset: str) -> int:
        return self._ledger.collateral_of(user, asset)

    def get_collateral_token_price_feed(self, asset: str) -> PriceFeed:
        return self._registry.get(asset).price_feed

    def get_dsc(self) -> DebtToken:
        return self._dsc

    @property
    def events(self) -> tuple[Event, ...]:
        return self._ledger.events

    def get_precision(self) -> int:
        return PRECISION

    def get_additional_feed_precision(self) -> int:
        return ADDITIONAL_FEED_PRECISION

    def get_liquidation_threshold(self) -> int:
        return self._config.liquidation_threshold

    def get_liquidation_precision(self) -> int:
        return self._config.liquidation_precision

    def get_liquidation_bonus(self) -> int:
        return self._config.liquidation_bonus

    def get_min_health_factor(self) -> int:
        return self._config.min_health_factor
