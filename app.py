import logging
import os
import time
from itertools import islice
from typing import Any, Dict

from flask import Flask, jsonify, request, render_template_string

from symtab import config
from symtab.errors import EmptyStructureError, KeyParseError, SymbolTableError
from symtab.storage import SymbolTableStore

logger = logging.getLogger("symtab.app")

app = Flask(__name__)

store = SymbolTableStore(key_type=config.KEY_TYPE)

STATE: Dict[str, Any] = {"csv_path": None, "loaded": False}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status


@app.errorhandler(KeyParseError)
def handle_bad_key(e: KeyParseError):
    return err(str(e), 400)

@app.errorhandler(EmptyStructureError)
def handle_empty(e: EmptyStructureError):
    return err("map is empty", 409, detail=str(e))


def warm_start():
    """Bulk-load the configured CSV at startup."""
    csv_path = (config.CSV_PATH or "").strip()
    STATE["csv_path"] = csv_path

    if not csv_path:
        logger.info("[warm_start] No CSV path provided; starting with an empty map.")
        return
    if not os.path.exists(csv_path):
        logger.warning("[warm_start] CSV not found: %s", csv_path)
        return

    t0 = time.time()
    try:
        summary = store.ingest_data(csv_path)
    except (OSError, ValueError, SymbolTableError) as e:
        logger.error("[warm_start] Ingestion failed, starting with %d keys: %s", len(store), e)
        return
    t1 = time.time()
    STATE["loaded"] = True
    logger.info("[warm_start] %d keys loaded (%d rows) in %.2fs", len(store), summary.rows_read, t1 - t0)

def parse_limit(raw, default: int = config.KEYS_LIMIT) -> int:
    try:
        return max(1, min(config.MAX_KEYS_LIMIT, int(raw)))
    except (TypeError, ValueError):
        return default


@app.get("/api/status")
def api_status():
    return ok({
        "csv_path": STATE["csv_path"],
        "loaded": STATE["loaded"],
        "size": len(store),
        "is_empty": store.is_empty(),
        "height": store.index.height(),
        "key_type": store.key_type,
    })


# ------------------ Point operations ------------------
@app.get("/api/keys/<key>")
def api_get(key: str):
    missing = object()
    value = store.get(key, missing)
    if value is missing:
        return err("key not found", 404, key=key)
    return ok({"key": store.parse_key(key), "value": value})

@app.put("/api/keys/<key>")
def api_put(key: str):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "value" not in data:
        return err("JSON body with a 'value' field required")

    created = store.put(key, data["value"])
    return ok({"key": store.parse_key(key), "created": created, "size": len(store)}), (201 if created else 200)

@app.delete("/api/keys/<key>")
def api_delete(key: str):
    deleted = store.delete(key)
    return ok({"key": store.parse_key(key), "deleted": deleted, "size": len(store)})

@app.get("/api/keys")
def api_keys():
    limit = parse_limit(request.args.get("limit", config.KEYS_LIMIT))
    keys = store.keys(limit)
    return ok({"count_returned": len(keys), "size": len(store), "keys": keys})


# ------------------ Order queries ------------------
@app.get("/api/order/min")
def api_min():
    return ok({"key": store.min()})

@app.get("/api/order/max")
def api_max():
    return ok({"key": store.max()})

@app.get("/api/order/floor/<key>")
def api_floor(key: str):
    found = store.floor(key)
    if found is None:
        return err("no key <= query", 404, query=key)
    return ok({"query": store.parse_key(key), "key": found})

@app.get("/api/order/ceiling/<key>")
def api_ceiling(key: str):
    found = store.ceiling(key)
    if found is None:
        return err("no key >= query", 404, query=key)
    return ok({"query": store.parse_key(key), "key": found})

@app.post("/api/order/delete_min")
def api_delete_min():
    removed = store.delete_min()
    return ok({"deleted": removed, "size": len(store)})

@app.post("/api/order/delete_max")
def api_delete_max():
    removed = store.delete_max()
    return ok({"deleted": removed, "size": len(store)})


# ------------------ Diagnostics ------------------
@app.get("/api/tree/level_order")
def api_level_order():
    keys = store.level_order()
    return ok({"count": len(keys), "keys": keys})

@app.get("/api/tree/check")
def api_check():
    return ok(store.summary())


HTML = r"""
<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>Ordered symbol table</title>
<style>
  body { font-family: system-ui, sans-serif; margin: 2rem; color: #1d2330; }
  table { border-collapse: collapse; margin-bottom: 1.5rem; }
  td, th { border: 1px solid #d5d9e2; padding: .35rem .75rem; text-align: left; }
  code { background: #f2f4f8; padding: .1rem .3rem; border-radius: 3px; }
</style>
</head>
<body>
  <h1>Ordered symbol table</h1>
  <table>
    <tr><th>Size</th><td>{{ summary.size }}</td></tr>
    <tr><th>Height</th><td>{{ summary.height }}</td></tr>
    <tr><th>Min</th><td>{{ summary.min if summary.min is not none else "-" }}</td></tr>
    <tr><th>Max</th><td>{{ summary.max if summary.max is not none else "-" }}</td></tr>
    <tr><th>Invariants</th><td>{{ "ok" if summary.invariants_ok else "BROKEN" }}</td></tr>
  </table>
  <h2>Level order</h2>
  <p>{% for k in level_order %}<code>{{ k }}</code> {% else %}<em>empty</em>{% endfor %}</p>
  <h2>In order (first {{ keys|length }})</h2>
  <p>{% for k in keys %}<code>{{ k }}</code> {% else %}<em>empty</em>{% endfor %}</p>
</body>
</html>
"""

@app.get("/")
def home():
    return render_template_string(
        HTML,
        summary=store.summary(),
        level_order=list(islice(store.index.level_order(), config.KEYS_LIMIT)),
        keys=store.keys(config.KEYS_LIMIT),
    )

if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    warm_start()
    app.run(host=config.HOST, port=config.PORT, debug=True, use_reloader=False)
