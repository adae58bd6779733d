#!/usr/bin/env python3
"""
Page Replacement Simulator
Implements Optimal (bounded lookahead), FIFO, LRU and Second Chance replacement
over a reference string of page numbers
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from refstring import InvalidParameter

logger = logging.getLogger(__name__)

EMPTY = -1  # marks a frame holding no page

POLICIES = ("Optimal", "FIFO", "LRU", "Second Chance")


def locate(frames: Sequence[int], page_num: int) -> Optional[int]:
    """Return the index of the frame holding page_num, or None if not resident"""
    for i, frame_page in enumerate(frames):
        if frame_page == page_num:
            return i
    return None


def _as_pages(reference_string) -> List[int]:
    return np.asarray(reference_string, dtype=np.int64).tolist()


class PageReplacementAlgorithm:
    """Base class for page replacement algorithms"""

    name = None

    def __init__(self, num_frames: int):
        if num_frames <= 0:
            raise InvalidParameter(f"frame count must be positive, got {num_frames}")
        self.num_frames = num_frames
        self.reset()

    def access_page(self, page_num: int) -> Tuple[bool, Optional[int]]:
        """
        Access a page, return (fault_occurred, evicted_page)
        """
        raise NotImplementedError

    def run(self, reference_string) -> int:
        """Reset, replay a whole reference string and return the fault count"""
        self.reset()
        for page_num in _as_pages(reference_string):
            self.access_page(page_num)
        logger.debug("%s: %d faults over %d references with %d frames",
                     self.name, self.page_faults, self.accesses, self.num_frames)
        return self.page_faults

    def _load(self, frame_idx: int, page_num: int) -> Optional[int]:
        """Place page_num in frame_idx, count the fault, return the evicted page"""
        evicted_page = self.frames[frame_idx]
        self.frames[frame_idx] = page_num
        self.page_faults += 1
        return None if evicted_page == EMPTY else evicted_page

    def reset(self):
        self.frames = [EMPTY] * self.num_frames
        self.page_faults = 0
        self.accesses = 0

    def get_statistics(self) -> Dict:
        return {
            'algorithm': self.name,
            'frames': self.num_frames,
            'accesses': self.accesses,
            'page_faults': self.page_faults,
            'page_fault_rate': self.page_faults / self.accesses if self.accesses > 0 else 0.0,
        }


class FIFOPageReplacement(PageReplacementAlgorithm):
    """First-In-First-Out page replacement"""

    name = "FIFO"

    def access_page(self, page_num: int) -> Tuple[bool, Optional[int]]:
        self.accesses += 1
        if locate(self.frames, page_num) is not None:
            return False, None

        # Oldest load sits under the insertion pointer
        evicted_page = self._load(self.front, page_num)
        self.front = (self.front + 1) % self.num_frames
        return True, evicted_page

    def reset(self):
        super().reset()
        self.front = 0


class LRUPageReplacement(PageReplacementAlgorithm):
    """Least Recently Used page replacement"""

    name = "LRU"

    def access_page(self, page_num: int) -> Tuple[bool, Optional[int]]:
        now = self.accesses
        self.accesses += 1
        frame_idx = locate(self.frames, page_num)
        if frame_idx is not None:
            self.last_used[frame_idx] = now
            return False, None

        # First frame with the oldest timestamp; empty frames carry -1
        victim = 0
        for i in range(1, self.num_frames):
            if self.last_used[i] < self.last_used[victim]:
                victim = i

        evicted_page = self._load(victim, page_num)
        self.last_used[victim] = now
        return True, evicted_page

    def reset(self):
        super().reset()
        self.last_used = [-1] * self.num_frames


class SecondChancePageReplacement(PageReplacementAlgorithm):
    """Second Chance (clock) page replacement"""

    name = "Second Chance"

    def access_page(self, page_num: int) -> Tuple[bool, Optional[int]]:
        self.accesses += 1
        frame_idx = locate(self.frames, page_num)
        if frame_idx is not None:
            self.ref_bits[frame_idx] = 1
            return False, None

        # Referenced frames lose their bit and are skipped once
        while self.ref_bits[self.pointer] == 1:
            self.ref_bits[self.pointer] = 0
            self.pointer = (self.pointer + 1) % self.num_frames

        evicted_page = self._load(self.pointer, page_num)
        self.ref_bits[self.pointer] = 1
        self.pointer = (self.pointer + 1) % self.num_frames
        return True, evicted_page

    def reset(self):
        super().reset()
        self.ref_bits = [0] * self.num_frames
        self.pointer = 0


class OptimalPageReplacement(PageReplacementAlgorithm):
    """
    Optimal page replacement with a bounded lookahead.

    On a fault only the next ``lookahead_limit`` references are inspected,
    so this approximates Belady's algorithm instead of reproducing it: a page
    needed just past the horizon looks exactly like a page never needed again.
    Within the horizon the victim is the frame whose first upcoming reference
    was found last; when some frame is not referenced inside the horizon the
    lowest such frame is evicted.
    """

    name = "Optimal"

    def __init__(self, num_frames: int, reference_string, lookahead_limit: int):
        if lookahead_limit < 0:
            raise InvalidParameter(f"lookahead limit must be >= 0, got {lookahead_limit}")
        self.reference_string = _as_pages(reference_string)
        self.lookahead_limit = lookahead_limit
        super().__init__(num_frames)

    def access_page(self, page_num: int) -> Tuple[bool, Optional[int]]:
        if self.current_pos >= len(self.reference_string) or \
                self.reference_string[self.current_pos] != page_num:
            raise ValueError(f"page {page_num} does not follow the reference string "
                             f"at position {self.current_pos}")
        if self.filled < self.num_frames:
            result = self._fill(page_num)
        else:
            result = self._replace(page_num)
        self.current_pos += 1
        self.accesses += 1
        return result

    def run(self, reference_string=None) -> int:
        if reference_string is not None:
            self.reference_string = _as_pages(reference_string)
        self.reset()
        pages = self.reference_string
        end = len(pages)

        # Warm-up: the first num_frames distinct pages go into empty frames
        while self.current_pos < end and self.filled < self.num_frames:
            self._fill(pages[self.current_pos])
            self.current_pos += 1
        warm_up_faults = self.page_faults

        # Steady state
        while self.current_pos < end:
            self._replace(pages[self.current_pos])
            self.current_pos += 1

        self.accesses = end
        logger.debug("Optimal: %d faults (%d during warm-up) over %d references, "
                     "%d frames, lookahead %d", self.page_faults, warm_up_faults,
                     end, self.num_frames, self.lookahead_limit)
        return self.page_faults

    def _fill(self, page_num: int) -> Tuple[bool, Optional[int]]:
        if locate(self.frames, page_num) is not None:
            return False, None
        self._load(self.filled, page_num)
        self.filled += 1
        return True, None

    def _replace(self, page_num: int) -> Tuple[bool, Optional[int]]:
        if locate(self.frames, page_num) is not None:
            return False, None
        victim = self._choose_victim()
        return True, self._load(victim, page_num)

    def _choose_victim(self) -> int:
        pages = self.reference_string
        needed = [False] * self.num_frames
        unmarked = self.num_frames
        victim = 0

        horizon = min(len(pages), self.current_pos + 1 + self.lookahead_limit)
        for future in range(self.current_pos + 1, horizon):
            frame_idx = locate(self.frames, pages[future])
            if frame_idx is None:
                continue
            victim = frame_idx
            if not needed[frame_idx]:
                needed[frame_idx] = True
                unmarked -= 1
                if unmarked == 0:
                    break

        if unmarked == 0:
            # Every frame is wanted again soon: drop the last one confirmed
            return victim
        return needed.index(False)

    def reset(self):
        super().reset()
        self.current_pos = 0
        self.filled = 0


class PageReplacementSimulator:
    """Fault counts for each policy over a complete reference string"""

    @staticmethod
    def optimal(pages, capacity: int, lookahead_limit: int) -> int:
        """Bounded-lookahead optimal page replacement"""
        return OptimalPageReplacement(capacity, pages, lookahead_limit).run()

    @staticmethod
    def fifo(pages, capacity: int) -> int:
        """FIFO page replacement"""
        return FIFOPageReplacement(capacity).run(pages)

    @staticmethod
    def lru(pages, capacity: int) -> int:
        """LRU page replacement"""
        return LRUPageReplacement(capacity).run(pages)

    @staticmethod
    def second_chance(pages, capacity: int) -> int:
        """Second Chance (clock) page replacement"""
        return SecondChancePageReplacement(capacity).run(pages)


def run_all(reference_string, frame_count: int, lookahead_limit: int) -> Dict[str, int]:
    """
    Run all four policies over the same reference string.
    Returns {policy name: fault count} in the order Optimal, FIFO, LRU, Second Chance.
    """
    if frame_count <= 0:
        raise InvalidParameter(f"frame count must be positive, got {frame_count}")
    pages = _as_pages(reference_string)
    return {
        "Optimal": PageReplacementSimulator.optimal(pages, frame_count, lookahead_limit),
        "FIFO": PageReplacementSimulator.fifo(pages, frame_count),
        "LRU": PageReplacementSimulator.lru(pages, frame_count),
        "Second Chance": PageReplacementSimulator.second_chance(pages, frame_count),
    }


def sweep_frames(reference_string, frame_counts: Iterable[int],
                 lookahead_limit: int) -> Dict[str, List[int]]:
    """Fault counts of every policy for each frame count, in frame_counts order"""
    pages = _as_pages(reference_string)
    sweep = {name: [] for name in POLICIES}
    for frame_count in frame_counts:
        for name, faults in run_all(pages, frame_count, lookahead_limit).items():
            sweep[name].append(faults)
    return sweep
