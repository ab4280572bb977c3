from flask import jsonify
from . import wiki_bp

@wiki_bp.route('/_health', methods=['GET'])
def health_check():
    return jsonify({
        "status": "ok",
        "service": "slugwiki"
    })
