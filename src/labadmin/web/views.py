"""
Web views for the lab management screen.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)

from labadmin.core.models import LabForm, parse_flag
from labadmin.core.view import COLUMNS, DELETE_PROMPT
from labadmin.web.app import build_view

views_bp = Blueprint("views", __name__)


def _render_screen(view, form: LabForm | None = None):
    return render_template(
        "labs.html",
        view=view,
        form=form or view.form_defaults,
        columns=COLUMNS,
    )


@views_bp.route("/")
def index():
    """Lab management screen.

    ?dialog=new opens the add dialog, ?edit=<id> the edit dialog.
    """
    view = build_view().mount()

    edit_id = request.args.get("edit")
    if edit_id and view.loaded:
        lab = view.find_lab(edit_id)
        if lab:
            view.open_edit(lab)
        else:
            flash(f"Lab '{edit_id}' not found", "error")
    elif request.args.get("dialog") == "new":
        view.open_create()

    return _render_screen(view)


@views_bp.route("/labs", methods=["POST"])
def lab_create():
    """Handle the add dialog form."""
    view = build_view().mount()
    view.open_create()

    if view.submit(request.form):
        return redirect(url_for("views.index"))

    # Keep the dialog open with what was entered
    return _render_screen(view, LabForm.from_form(request.form))


@views_bp.route("/labs/<lab_id>", methods=["POST"])
def lab_update(lab_id: str):
    """Handle the edit dialog form."""
    view = build_view().mount()
    if not view.loaded:
        return redirect(url_for("views.index"))

    lab = view.find_lab(lab_id)
    if not lab:
        flash(f"Lab '{lab_id}' not found", "error")
        return redirect(url_for("views.index"))

    view.open_edit(lab)
    if view.submit(request.form):
        return redirect(url_for("views.index"))

    return _render_screen(view, LabForm.from_form(request.form))


@views_bp.route("/labs/<lab_id>/toggle", methods=["POST"])
def lab_toggle(lab_id: str):
    """Flip a lab between Available and In Use."""
    current = parse_flag(request.form.get("current", "true"))
    build_view().toggle_availability(lab_id, current)
    return redirect(url_for("views.index"))


@views_bp.route("/labs/<lab_id>/delete", methods=["POST"])
def lab_delete(lab_id: str):
    """Delete a lab once the confirmation page has been answered."""
    confirmed = request.form.get("confirmed") == "yes"
    view = build_view()

    if view.delete(lab_id, confirm=lambda message: confirmed):
        return redirect(url_for("views.index"))

    if not confirmed:
        view.mount()
        return render_template(
            "confirm_delete.html",
            lab=view.find_lab(lab_id),
            lab_id=lab_id,
            prompt=DELETE_PROMPT,
        )

    return redirect(url_for("views.index"))


@views_bp.route("/settings")
def settings():
    """Settings page."""
    config = current_app.config["LABADMIN_CONFIG"]
    api_key = config.store.api_key
    masked = f"{api_key[:4]}..." if api_key else "-"

    return render_template("settings.html", config=config, api_key=masked)
