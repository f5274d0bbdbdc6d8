from prometheus_client.parser import text_string_to_metric_families

import relayer_metrics.exposition as exposition
from relayer_metrics.metrics import MetricsRegistry


def parsed_samples(text):
    return {
        (s.name, tuple(sorted(s.labels.items()))): s.value
        for family in text_string_to_metric_families(text)
        for s in family.samples
    }


def test_render_snapshot():
    metrics = MetricsRegistry()
    metrics.observe_packets("path-ab", "chainA", "channel-0", "transfer", "recv_packet", 5)
    metrics.set_latest_height("osmosis-1", 12400)

    text = exposition.render(metrics.registry).decode()
    samples = parsed_samples(text)
    observed = dict(path="path-ab", chain="chainA", channel="channel-0", port="transfer", type="recv_packet")
    assert samples[('cosmos_relayer_observed_packets_total', tuple(sorted(observed.items())))] == 5
    assert samples[('cosmos_relayer_chain_latest_height', (('chain', 'osmosis-1'),))] == 12400
    assert '# HELP cosmos_relayer_client_expiration_seconds Seconds until the client expires' in text


def test_serve_uses_own_registry(monkeypatch):
    calls = []

    def fake_start(port, addr='0.0.0.0', registry=None):
        calls.append((port, addr, registry))

    monkeypatch.setattr(exposition, 'start_http_server', fake_start)
    metrics = MetricsRegistry()
    exposition.serve(metrics, '127.0.0.1', 5183)
    assert calls == [(5183, '127.0.0.1', metrics.registry)]
