import logging
from datetime import timedelta
from typing import List, Optional, Union

from prometheus_client import CollectorRegistry, Counter, Gauge

from relayer_metrics.durations import format_duration

logger = logging.getLogger(__name__)

# Label schemas, in the order values are passed to the recording methods
PACKET_LABELS = ('path', 'chain', 'channel', 'port', 'type')
HEIGHT_LABELS = ('chain',)
WALLET_LABELS = ('chain', 'gas_price', 'key', 'address', 'denom')
BLOCK_QUERY_FAILURE_LABELS = ('chain', 'type')
CLIENT_EXPIRATION_LABELS = ('path_name', 'chain', 'client_id', 'trusting_period')

# Conventional values of the block query failure "type" label
BLOCK_QUERY_RPC_CLIENT = 'RPC Client'
BLOCK_QUERY_IBC_HEADER = 'IBC Header'


class MetricsRegistry:
    """Relayer metrics registered against a dedicated collector registry.

    ``registry`` is handed to whatever serves the scrape endpoint; the
    relayer subsystems only call the recording methods below. Label values
    are positional and follow the schemas declared at module level.

    ``cosmos_relayer_fees_spent`` is a gauge: callers keep the running total
    and report the latest cumulative amount.

    Counters also expose ``<name>_created`` series unless the caller runs
    ``prometheus_client.disable_created_metrics()`` before the first
    observation; the command line entrypoint does this by default.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        # Packet metrics
        self.packets_observed = Counter(
            'cosmos_relayer_observed_packets',
            'The total number of observed packets',
            PACKET_LABELS,
            registry=self.registry,
        )
        self.packets_relayed = Counter(
            'cosmos_relayer_relayed_packets',
            'The total number of relayed packets',
            PACKET_LABELS,
            registry=self.registry,
        )

        # Chain metrics
        self.latest_height = Gauge(
            'cosmos_relayer_chain_latest_height',
            'The current height of the chain',
            HEIGHT_LABELS,
            registry=self.registry,
        )
        self.block_query_failures = Counter(
            'cosmos_relayer_block_query_errors_total',
            "The total number of block query failures. The failures are separated into two categories: "
            "'RPC Client' and 'IBC Header'",
            BLOCK_QUERY_FAILURE_LABELS,
            registry=self.registry,
        )

        # Wallet metrics
        self.wallet_balance = Gauge(
            'cosmos_relayer_wallet_balance',
            "The current balance for the relayer's wallet",
            WALLET_LABELS,
            registry=self.registry,
        )
        self.fees_spent = Gauge(
            'cosmos_relayer_fees_spent',
            "The amount of fees spent from the relayer's wallet",
            WALLET_LABELS,
            registry=self.registry,
        )

        # Client metrics
        self.client_expiration = Gauge(
            'cosmos_relayer_client_expiration_seconds',
            'Seconds until the client expires',
            CLIENT_EXPIRATION_LABELS,
            registry=self.registry,
        )

        logger.debug("Registered %d relayer metrics", len(self.instruments()))

    def instruments(self) -> List[Union[Counter, Gauge]]:
        return [
            self.packets_observed,
            self.packets_relayed,
            self.latest_height,
            self.wallet_balance,
            self.fees_spent,
            self.block_query_failures,
            self.client_expiration,
        ]

    # -------- recording --------

    def observe_packets(self, path: str, chain: str, channel: str, port: str, event_type: str, count: int) -> None:
        self.packets_observed.labels(path, chain, channel, port, event_type).inc(float(count))

    def inc_packets_relayed(self, path: str, chain: str, channel: str, port: str, event_type: str) -> None:
        self.packets_relayed.labels(path, chain, channel, port, event_type).inc()

    def set_latest_height(self, chain: str, height: int) -> None:
        self.latest_height.labels(chain).set(float(height))

    def set_wallet_balance(self, chain: str, gas_price: str, key: str, address: str, denom: str,
                           balance: float) -> None:
        self.wallet_balance.labels(chain, gas_price, key, address, denom).set(balance)

    def set_fees_spent(self, chain: str, gas_price: str, key: str, address: str, denom: str,
                       amount: float) -> None:
        self.fees_spent.labels(chain, gas_price, key, address, denom).set(amount)

    def set_client_expiration(
        self,
        path_name: str,
        chain: str,
        client_id: str,
        trusting_period: Union[str, timedelta],
        time_to_expiration: Union[timedelta, float],
    ) -> None:
        """Set the seconds left before ``client_id`` expires.

        ``trusting_period`` is used as a label; a timedelta is rendered the
        way the chain reports it (e.g. ``336h0m0s``).
        """
        if isinstance(trusting_period, timedelta):
            trusting_period = format_duration(trusting_period)
        if isinstance(time_to_expiration, timedelta):
            seconds = time_to_expiration.total_seconds()
        else:
            seconds = float(time_to_expiration)
        self.client_expiration.labels(path_name, chain, client_id, trusting_period).set(seconds)

    def inc_block_query_failure(self, chain: str, failure_type: str) -> None:
        self.block_query_failures.labels(chain, failure_type).inc()
