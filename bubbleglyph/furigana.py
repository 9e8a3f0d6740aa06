# furigana.py
# Annotation (furigana) resolution within one text cluster.

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Tuple

from .decide import T, Direction, Thresholds, attaches_above, attaches_beside, furigana_candidates
from .geometry import Rect

logger = logging.getLogger(__name__)

AnnotationMapping = Dict[Rect, List[Rect]]


def most_overlapping(target: Rect, candidates: List[Rect],
                     overlap: Callable[[Rect, Rect], int] = Rect.vertical_overlap) -> Optional[Rect]:
    """Candidate sharing the most rows (or columns, per `overlap`) with `target`; None if none share any."""
    best, best_overlap = None, 0
    for c in candidates:
        shared = overlap(target, c)
        if shared > best_overlap:
            best, best_overlap = c, shared
    return best

def resolve_annotations(glyphs: List[Rect], direction: Direction = Direction.DOWN,
                        t: Thresholds = T) -> Tuple[List[Rect], AnnotationMapping]:
    """
    Split a cluster's boxes into full glyphs and furigana.
    Returns (full glyphs, host -> [annotations]). Candidates that find no host
    are returned as full glyphs. One pass; hosts are only the glyphs that were
    full-size to begin with.
    """
    candidates = furigana_candidates(glyphs, t)
    taken = set(map(id, candidates))
    hosts = [g for g in glyphs if id(g) not in taken]
    full = list(hosts)
    mapping: AnnotationMapping = {}

    for cand in candidates:
        host = most_overlapping(cand, hosts)
        if host is not None:
            accepted = attaches_beside(cand, host)
        elif direction is Direction.LTR:
            # horizontal text carries its readings on top
            below = [h for h in hosts if cand.bottom <= h.y]
            host = most_overlapping(cand, below, Rect.horizontal_overlap)
            accepted = host is not None and attaches_above(cand, host)
        else:
            accepted = False

        if accepted:
            mapping.setdefault(host, []).append(cand)
        else:
            logger.debug("furigana candidate %s reverts to a full glyph", cand.as_tuple())
            full.append(cand)

    for annotations in mapping.values():
        annotations.sort(key=lambda r: (r.y, r.x))
    return full, mapping
