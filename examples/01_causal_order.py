"""Ordem causal: três processos trocando mensagens com vector clocks."""

from dataclasses import dataclass

from vclock import Condition, VectorClock


@dataclass
class Process:
    name: str
    clock: VectorClock

    def event(self, what: str) -> None:
        self.clock.tick(self.name)
        print(f"  {self.name} {what:<14} {self.clock}")

    def send(self) -> bytes:
        self.event("send")
        return self.clock.to_bytes()

    def receive(self, data: bytes) -> None:
        self.clock.merge(VectorClock.from_bytes(data))
        self.event("receive")


def main() -> None:
    a = Process("A", VectorClock())
    b = Process("B", VectorClock())
    c = Process("C", VectorClock())

    a.event("local")
    b.receive(a.send())
    snapshot_b = b.clock.copy()

    c.event("local")
    b.event("local")

    print()
    print(f"A vs B: {a.clock.order(b.clock).name}")
    print(f"B vs C: {b.clock.order(c.clock).name}")
    print(f"B vs snapshot: {b.clock.order(snapshot_b).name}")

    stale = not b.clock.compare(c.clock, Condition.ANCESTOR | Condition.EQUAL)
    print(f"C has news for B: {stale}")


main()
