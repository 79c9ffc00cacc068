from rxmanager.services.rx_layout.backend import (  # noqa: F401
    RecordingBackend, RenderBackend, ReportLabBackend,
)
from rxmanager.services.rx_layout.errors import (  # noqa: F401
    RxInputError, RxLayoutError,
)
from rxmanager.services.rx_layout.grouping import group_by_time  # noqa: F401
from rxmanager.services.rx_layout.layout import (  # noqa: F401
    render_prescription, section_height,
)
from rxmanager.services.rx_layout.entities import (  # noqa: F401
    DrawOp, LayoutCursor, MealRelation, PrescriptionDocument, Rect,
    ResolvedEntry, SECTION_ORDER, TimeOfDay,
)
