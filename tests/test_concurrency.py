import threading

from src.message_service import MessageBroker


def test_callback_can_mutate_registry_from_another_thread():
    broker = MessageBroker()
    ctx = broker.create_context()
    done = []

    def callback(payload):
        t = threading.Thread(target=lambda: done.append(broker.subscribe(ctx, "msg", lambda p: None)))
        t.start()
        t.join(timeout=5)

    broker.subscribe(ctx, "msg", callback)
    broker.publish("msg", None)

    assert len(done) == 1
    assert broker.subscriber_count("msg") == 2


def test_parallel_subscribe_unsubscribe_during_publish():
    broker = MessageBroker()
    errors = []
    broker.set_error_handler(errors.append)
    stop = threading.Event()

    def churn():
        ctx = broker.create_context()
        while not stop.is_set():
            sub = broker.subscribe(ctx, "hot", lambda p: None)
            broker.unsubscribe(sub)
        ctx.dispose()

    workers = [threading.Thread(target=churn) for _ in range(4)]
    for w in workers:
        w.start()
    try:
        for i in range(500):
            broker.publish("hot", i)
    finally:
        stop.set()
        for w in workers:
            w.join(timeout=5)

    assert not any(w.is_alive() for w in workers)
    assert errors == []
    assert len(broker.registry) == 0
    assert broker.registry.channels() == []
