from .audit import handle_audit
from .files import checkout_for_edit, collect_go_files
from .fix import FileReport, handle_fix, render_diff
