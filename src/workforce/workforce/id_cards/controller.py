from __future__ import annotations

import io

from flask import Flask, send_file

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/id-cards/<helper_id>.pdf", methods=["GET"], endpoint="id_card_pdf")
    def id_card_pdf(helper_id: str):
        card = container.id_card_service.render(helper_id)
        return send_file(
            io.BytesIO(card.content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=card.filename,
        )
