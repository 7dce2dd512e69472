from payment_faker.clients.faker import PaymentFakerClient
from payment_faker.clients.randomness import SeededRandomSource, SystemRandomSource


def test_seeded_sources_repeat():
    first = SeededRandomSource(42)
    second = SeededRandomSource(42)

    assert [first.random() for _ in range(3)] == [second.random() for _ in range(3)]
    assert first.token_hex(16) == second.token_hex(16)
    assert first.randint(100, 500) == second.randint(100, 500)


def test_token_lengths():
    assert len(SeededRandomSource(1).token_hex(16)) == 32
    assert len(SystemRandomSource().token_hex(16)) == 32


def test_system_source_ranges():
    source = SystemRandomSource()
    for _ in range(100):
        assert 0.0 <= source.random() < 1.0
        assert 3 <= source.randint(3, 7) <= 7


def _run(seed):
    client = PaymentFakerClient(success_rate=0.5, random_source=SeededRandomSource(seed))
    outcomes = []
    for i in range(20):
        ref = f"T{i}"
        token = client.initiate_payment({"transaction_id": ref, "amount": 1}, "s", "c").payment_token
        outcomes.append((token, client.resolve_payment(ref).status))
    return outcomes


def test_seeded_client_runs_are_reproducible():
    assert _run(7) == _run(7)
