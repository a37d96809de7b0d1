"""Participant statistics stored beside the gallery."""

from dataclasses import dataclass
from typing import Protocol

from skb_backend.domain.gallery import PesertaPaket


class StatisticsRepository(Protocol):
    """Persistence interface for the statistics sub-record."""

    async def get_peserta_paket(self) -> PesertaPaket | None:
        """Return the stored counts, if any were written."""

    async def set_peserta_paket(self, counts: PesertaPaket) -> None:
        """Replace the stored counts, creating the document if needed."""


@dataclass
class StatisticsService:
    """Last-write-wins access to the participant counts."""

    repository: StatisticsRepository

    async def get(self) -> PesertaPaket:
        """Return the current counts, all zero before the first write."""
        counts = await self.repository.get_peserta_paket()
        return counts or PesertaPaket()

    async def update(
        self,
        paud_count: int,
        paket_a_count: int,
        paket_b_count: int,
        paket_c_count: int,
    ) -> PesertaPaket:
        """Overwrite the counts and return what was stored."""
        counts = PesertaPaket(
            siswa_paud=paud_count,
            paket_a=paket_a_count,
            paket_b=paket_b_count,
            paket_c=paket_c_count,
        )
        await self.repository.set_peserta_paket(counts)
        return counts
