# core/scroll_arbitrator.py
"""
Scroll arbitration for synchronized viewports.

Moving a view programmatically makes the widget report a scroll of its own. If
those reports were translated again, the views would keep re-adjusting each
other. The arbitrator is a two-state machine (Idle / Syncing(origin)) that only
lets a scroll start a synchronization pass while Idle and drops every scroll
notification that arrives during a pass.

`arbitrate` is the pure decision function; `ScrollArbitrator` owns the current
state and the three viewport states and applies the decisions.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from .alignment import ALL_VIEWS, AlignmentTable
from .translator import clampLine, translate

logger: logging.Logger = logging.getLogger(__name__)

# --- Arbitrator Phases ---
PHASE_IDLE: str = 'idle'
PHASE_SYNCING: str = 'syncing'

# --- Arbitration Policies ---
POLICY_ARBITRATE: str = 'arbitrate' # Any view may start a pass while Idle
POLICY_HOVER: str = 'hover' # Only the view under the pointer may start a pass
SYNC_POLICIES: Tuple[str, ...] = (POLICY_ARBITRATE, POLICY_HOVER)

# Callback the presentation layer supplies to move a widget: (view, firstVisibleLine)
ViewportApplier = Callable[[str, int], None]


@dataclass(frozen=True)
class ArbitratorState:
	phase: str
	origin: Optional[str] = None

	@property
	def isIdle(self: 'ArbitratorState') -> bool:
		return self.phase == PHASE_IDLE


IDLE: ArbitratorState = ArbitratorState(PHASE_IDLE)


def syncing(origin: str) -> ArbitratorState:
	return ArbitratorState(PHASE_SYNCING, origin)


@dataclass(frozen=True)
class ViewportState:
	"""
	First visible line and total line count of one view.
	Instances are replaced, never mutated.
	"""
	view: str
	firstVisibleLine: int
	totalLines: int

	def movedTo(self: 'ViewportState', line: int) -> 'ViewportState':
		return replace(self, firstVisibleLine=clampLine(line, self.totalLines))


@dataclass(frozen=True)
class ScrollEvent:
	"""
	A scroll notification from the presentation layer.

	Attributes:
		view (str): The view that scrolled.
		firstVisibleLine (int): Its new first visible line.
		hoveredView (Optional[str]): The view under the pointer when the event fired, if known.
	"""
	view: str
	firstVisibleLine: int
	hoveredView: Optional[str] = None


def arbitrate(state: ArbitratorState, event: ScrollEvent, table: AlignmentTable, policy: str = POLICY_ARBITRATE) -> Tuple[ArbitratorState, Dict[str, int]]:
	"""
	Decides whether a scroll event starts a synchronization pass.

	Args:
		state (ArbitratorState): Current arbitrator state.
		event (ScrollEvent): The incoming scroll notification.
		table (AlignmentTable): Alignment table of the current Diff Result.
		policy (str): POLICY_ARBITRATE or POLICY_HOVER.

	Returns:
		Tuple[ArbitratorState, Dict[str, int]]: (Syncing(event.view), translations) when a pass
			starts; otherwise the unchanged state and an empty dict.
	"""
	if not state.isIdle:
		# Side effect of the pass in progress, including the origin's own echo
		return state, {}
	if policy == POLICY_HOVER and event.hoveredView != event.view:
		return state, {}
	if table.totalLines(event.view) == 0:
		return state, {}
	return syncing(event.view), translate(table, event.view, event.firstVisibleLine)


class ScrollArbitrator:
	"""
	Owns the arbitrator state and the viewport state of the three views for one Diff Result.

	A new instance is created whenever a new Diff Result replaces the old one.
	"""

	def __init__(self: 'ScrollArbitrator', table: AlignmentTable, applier: Optional[ViewportApplier] = None, policy: str = POLICY_ARBITRATE) -> None:
		"""
		Args:
			table (AlignmentTable): Alignment table of the Diff Result being displayed.
			applier (Optional[ViewportApplier]): Called for every view moved by a pass.
			policy (str): POLICY_ARBITRATE or POLICY_HOVER.
		"""
		if policy not in SYNC_POLICIES:
			raise ValueError(f"Unknown sync policy '{policy}'. Expected one of: {', '.join(SYNC_POLICIES)}")
		self._table: AlignmentTable = table
		self._applier: Optional[ViewportApplier] = applier
		self._policy: str = policy
		self._state: ArbitratorState = IDLE
		self._viewports: Dict[str, ViewportState] = {
			view: ViewportState(view, 0, table.totalLines(view)) for view in ALL_VIEWS
		}
		self._passCount: int = 0
		self._ignoredCount: int = 0

	# --- Read-only Accessors ---
	@property
	def state(self: 'ScrollArbitrator') -> ArbitratorState:
		return self._state

	@property
	def policy(self: 'ScrollArbitrator') -> str:
		return self._policy

	@property
	def passCount(self: 'ScrollArbitrator') -> int:
		""" Number of completed synchronization passes. """
		return self._passCount

	@property
	def ignoredCount(self: 'ScrollArbitrator') -> int:
		""" Number of scroll notifications dropped because a pass was running. """
		return self._ignoredCount

	def viewport(self: 'ScrollArbitrator', view: str) -> ViewportState:
		return self._viewports[view]

	@property
	def viewports(self: 'ScrollArbitrator') -> Dict[str, ViewportState]:
		return dict(self._viewports)

	# --- Transitions ---
	def handleScroll(self: 'ScrollArbitrator', view: str, firstVisibleLine: int, hoveredView: Optional[str] = None) -> Dict[str, int]:
		"""
		Processes a scroll notification from `view`.

		Returns:
			Dict[str, int]: The target positions applied by the pass this event started,
							or an empty dict if the event was ignored.
		"""
		if view not in self._viewports:
			raise ValueError(f"Unknown view: '{view}'")
		event = ScrollEvent(view, firstVisibleLine, hoveredView)
		newState, targets = arbitrate(self._state, event, self._table, self._policy)

		if newState.isIdle:
			if not self._state.isIdle:
				self._ignoredCount += 1
				logger.debug(f"Ignoring scroll of '{view}' to {firstVisibleLine} while syncing from '{self._state.origin}'.")
			else:
				# Not a sync source (hover gating or empty view), but the view did move
				self._viewports[view] = self._viewports[view].movedTo(firstVisibleLine)
			return {}

		self._viewports[view] = self._viewports[view].movedTo(firstVisibleLine)
		self._runPass(newState, targets)
		return targets

	def jumpTo(self: 'ScrollArbitrator', view: str, line: int) -> Dict[str, int]:
		"""
		Moves `view` to `line` and synchronizes the other two, as one pass.
		Used for programmatic navigation; ignores hover gating but never interrupts a running pass.

		Returns:
			Dict[str, int]: Positions applied to all three views, or an empty dict if a pass was running.
		"""
		if not self._state.isIdle:
			self._ignoredCount += 1
			logger.debug(f"Ignoring jump of '{view}' to {line} while syncing from '{self._state.origin}'.")
			return {}
		if self._table.totalLines(view) == 0:
			return {}
		target: int = clampLine(line, self._table.totalLines(view))
		positions: Dict[str, int] = {view: target}
		positions.update(translate(self._table, view, target))
		self._runPass(syncing(view), positions)
		return positions

	def _runPass(self: 'ScrollArbitrator', passState: ArbitratorState, positions: Dict[str, int]) -> None:
		self._state = passState
		logger.debug(f"Sync pass from '{passState.origin}': {positions}")
		try:
			for targetView, targetLine in positions.items():
				self._viewports[targetView] = self._viewports[targetView].movedTo(targetLine)
				if self._applier is not None:
					self._applier(targetView, self._viewports[targetView].firstVisibleLine)
		finally:
			self._state = IDLE
			self._passCount += 1
