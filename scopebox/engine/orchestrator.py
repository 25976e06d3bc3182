"""Layout orchestrator: recursive, top-down packing of a scope tree.

Each container reserves a header band, packs its viable children into the
remaining content area and then recurses into every child it placed. The
recursion builds layout nodes bottom-up and never touches its input.
"""

from __future__ import annotations

import logging
import math
import time

from scopebox.engine.allocator import (
    allocate_containers,
    container_budget,
    content_rect_for,
    leaf_band_height,
)
from scopebox.engine.config import LayoutConfig
from scopebox.engine.diagnostics import DiagnosticsCallback, EventKind, emit
from scopebox.engine.fallback import place_with_fallback
from scopebox.engine.grid import select_grid
from scopebox.engine.leaf_sizing import estimated_leaf_size, render_mode_for, size_leaf
from scopebox.engine.nodes import (
    HiddenReason,
    InputNode,
    LayoutNode,
    PackerItem,
    Placement,
    RenderMode,
)
from scopebox.engine.optimizer import optimize_utilization
from scopebox.engine.packer import BinPacker
from scopebox.utils.geometry import Rect

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Turns an input tree plus an allocated rectangle into a layout tree."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        diagnostics: DiagnosticsCallback | None = None,
    ) -> None:
        self.config = config or LayoutConfig()
        self.diagnostics = diagnostics

    def layout(self, node: InputNode, allocated: Rect, depth: int = 0) -> LayoutNode:
        """Lay out ``node`` inside ``allocated`` (absolute coordinates)."""
        viable = [(i, c) for i, c in enumerate(node.children) if c.weight > 0]
        if not viable:
            return self._layout_leaf(node, allocated, depth)
        return self._layout_container(node, viable, allocated, depth)

    def _layout_leaf(self, node: InputNode, allocated: Rect, depth: int) -> LayoutNode:
        if render_mode_for(allocated.w, allocated.h, self.config) is RenderMode.NONE:
            return LayoutNode(
                node, allocated.x, allocated.y, allocated.w, allocated.h, RenderMode.NONE, depth
            )

        w, h = size_leaf(allocated.w, allocated.h, self.config)
        mode = render_mode_for(w, h, self.config)
        if mode is RenderMode.NONE:
            mode = RenderMode.BOX  # the allocation itself was visible
        return LayoutNode(node, allocated.x, allocated.y, w, h, mode, depth)

    def _layout_container(
        self,
        node: InputNode,
        viable: list[tuple[int, InputNode]],
        allocated: Rect,
        depth: int,
    ) -> LayoutNode:
        cfg = self.config
        mode = render_mode_for(allocated.w, allocated.h, cfg)
        _, content = content_rect_for(allocated, depth, cfg)

        def collapsed(render_mode: RenderMode, reason: HiddenReason) -> LayoutNode:
            return LayoutNode(
                node,
                allocated.x,
                allocated.y,
                allocated.w,
                allocated.h,
                render_mode,
                depth,
                is_container=True,
                hidden_children_count=len(viable),
                is_constrained_by_depth=True,
                hidden_reason=reason,
                content_rect=content,
            )

        if mode is RenderMode.NONE:
            return collapsed(RenderMode.NONE, HiddenReason.SIZE_CONSTRAINTS)

        if cfg.max_depth is not None and depth >= cfg.max_depth:
            emit(self.diagnostics, EventKind.DEPTH_LIMITED, node.id, depth, hidden=len(viable))
            return collapsed(mode, HiddenReason.DEPTH_LIMIT)

        if content.w < cfg.min_box_size or content.h < cfg.min_box_size:
            for _, child in viable:
                emit(
                    self.diagnostics,
                    EventKind.ITEM_HIDDEN,
                    child.id,
                    depth + 1,
                    reason=HiddenReason.SIZE_CONSTRAINTS.value,
                )
            return collapsed(mode, HiddenReason.SIZE_CONSTRAINTS)

        placements, free_rects = self._pack(node, viable, content, depth)

        children = []
        unplaced = 0
        too_small = 0
        for index, child in viable:
            placement = placements.get(index)
            if placement is None:
                unplaced += 1
                continue
            child_layout = self.layout(
                child, placement.rect.translate(content.x, content.y), depth + 1
            )
            if child_layout.render_mode is RenderMode.NONE:
                too_small += 1
                continue
            children.append(child_layout)

        hidden = unplaced + too_small
        if unplaced:
            reason = HiddenReason.BIN_PACKING_CONSTRAINTS
        elif too_small:
            reason = HiddenReason.SIZE_CONSTRAINTS
        else:
            reason = None

        return LayoutNode(
            node,
            allocated.x,
            allocated.y,
            allocated.w,
            allocated.h,
            mode,
            depth,
            is_container=True,
            children=tuple(children),
            hidden_children_count=hidden,
            is_constrained_by_depth=hidden == len(viable),
            hidden_reason=reason,
            content_rect=content,
            free_rects=tuple(r.translate(content.x, content.y) for r in free_rects),
        )

    def _pack(
        self,
        node: InputNode,
        viable: list[tuple[int, InputNode]],
        content: Rect,
        depth: int,
    ) -> tuple[dict[int, Placement], tuple[Rect, ...]]:
        """Pack the viable children into ``content``; placements are content-local."""
        cfg = self.config
        cw, ch = content.w, content.h

        containers = [(i, c) for i, c in viable if c.is_container]
        leaves = [(i, c) for i, c in viable if not c.is_container]

        est_w, est_h = estimated_leaf_size(cw, ch, cfg)
        budget = container_budget(
            cw,
            ch,
            sum(c.weight for _, c in containers),
            sum(c.weight for _, c in leaves),
            len(leaves) * est_w * est_h,
            cfg,
        )
        band_h = ch
        container_h = ch
        if containers and leaves:
            band_h = leaf_band_height(cw, ch, budget, est_h, cfg)
            if band_h > 0:
                container_h = ch - band_h
                budget = min(budget, cw * container_h)
            else:
                band_h = ch

        container_items = allocate_containers(containers, cw, container_h, budget, cfg)
        leaf_items = self._leaf_items(node, leaves, cw, band_h, depth)

        result = optimize_utilization(container_items + leaf_items, cw, ch, cfg)
        if result.adjusted:
            emit(
                self.diagnostics,
                EventKind.UTILIZATION_ADJUSTED,
                node.id,
                depth,
                mode=result.mode.value,
                before=result.utilization_before,
                after=result.utilization_after,
            )

        pinned = [i for i in result.items if i.is_container]
        loose = [i for i in result.items if not i.is_container]
        pinned.sort(key=lambda i: (-i.target_area, -i.value, i.index))
        loose.sort(key=lambda i: (-i.target_area, -i.value, i.index))

        packer = BinPacker(cw, ch, cfg)
        placements: dict[int, Placement] = {}
        for item in pinned + loose:
            placement = self._place(packer, item, node.id, depth)
            if placement is None:
                continue
            if not item.is_container:
                w, h = size_leaf(placement.rect.w, placement.rect.h, cfg)
                placement = packer.reclaim(placement, w, h)
            placements[item.index] = placement

        emit(
            self.diagnostics,
            EventKind.CONTAINER_PACKED,
            node.id,
            depth,
            placed=len(placements),
            hidden=len(viable) - len(placements),
            utilization=packer.utilization,
            free_rects=len(packer.pool),
        )
        logger.debug(
            "Packed %s: %d/%d children, utilization %.2f",
            node.id,
            len(placements),
            len(viable),
            packer.utilization,
        )
        free_rects = packer.pool.rects if cfg.collect_free_rectangles else ()
        return placements, free_rects

    def _leaf_items(
        self,
        node: InputNode,
        leaves: list[tuple[int, InputNode]],
        band_w: float,
        band_h: float,
        depth: int,
    ) -> list[PackerItem]:
        """Packing targets for the loose leaves, via the grid selector."""
        if not leaves:
            return []

        ordered = sorted(leaves, key=lambda pair: (-pair[1].weight, pair[0]))
        grid = select_grid([c.weight for _, c in ordered], band_w, band_h, self.config)
        if grid.is_grid:
            emit(
                self.diagnostics,
                EventKind.GRID_SELECTED,
                node.id,
                depth,
                rows=grid.rows,
                cols=grid.cols,
                cell_aspect=grid.cell_aspect,
                proportional=grid.proportional,
            )
            sizes = list(grid.cell_sizes)
        else:
            est = estimated_leaf_size(band_w, band_h, self.config)
            sizes = [est] * len(ordered)

        return [
            PackerItem(
                id=child.id,
                target_w=w,
                target_h=h,
                value=child.weight,
                index=index,
            )
            for (index, child), (w, h) in zip(ordered, sizes)
        ]

    def _place(
        self, packer: BinPacker, item: PackerItem, parent_id: str, depth: int
    ) -> Placement | None:
        cfg = self.config
        if item.target_w < cfg.min_box_size or item.target_h < cfg.min_box_size:
            # Sub-minimum targets still get a placement attempt at the minimum box
            item = item.resized(
                max(item.target_w, cfg.min_box_size), max(item.target_h, cfg.min_box_size)
            )

        placement = packer.place(item)
        if placement is None:
            placement = place_with_fallback(packer, item, cfg)
            if placement is not None:
                emit(
                    self.diagnostics,
                    EventKind.FALLBACK_USED,
                    item.id,
                    depth + 1,
                    parent=parent_id,
                    target=(item.target_w, item.target_h),
                    placed=(placement.rect.w, placement.rect.h),
                )
        if placement is None:
            emit(
                self.diagnostics,
                EventKind.ITEM_HIDDEN,
                item.id,
                depth + 1,
                parent=parent_id,
                reason=HiddenReason.BIN_PACKING_CONSTRAINTS.value,
            )
        return placement


def layout(
    node: InputNode,
    allocated: Rect,
    depth: int = 0,
    config: LayoutConfig | None = None,
    diagnostics: DiagnosticsCallback | None = None,
) -> LayoutNode:
    """Lay out one subtree inside an absolute rectangle."""
    return LayoutEngine(config, diagnostics).layout(node, allocated, depth)


def compute_layout(
    root: InputNode,
    viewport_w: float,
    viewport_h: float,
    config: LayoutConfig | None = None,
    diagnostics: DiagnosticsCallback | None = None,
) -> LayoutNode:
    """Lay out a whole tree in a ``viewport_w × viewport_h`` viewport at (0, 0).

    Non-finite or negative viewport dimensions are treated as 0, which yields
    a root with render mode ``none``.
    """
    start = time.perf_counter()
    w = viewport_w if math.isfinite(viewport_w) and viewport_w > 0 else 0.0
    h = viewport_h if math.isfinite(viewport_h) and viewport_h > 0 else 0.0

    result = LayoutEngine(config, diagnostics).layout(root, Rect(0.0, 0.0, w, h), 0)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Layout complete: %d nodes placed, %d hidden in %.1fms",
        result.node_count,
        result.total_hidden,
        elapsed,
    )
    return result
