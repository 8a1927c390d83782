
import logging
import os
import tempfile
import time

from symtab import config
from symtab.generator import generate
from symtab.indexing import OrderedMap
from symtab.storage import SymbolTableStore


def run_smoke_test():
    print("--- OrderedMap smoke test ---")
    st = OrderedMap()
    for i, key in enumerate("SEARCHEXMPL"):
        st.put(key, i)

    print(f"size={st.size()}  height={st.height()}")
    print(f"min={st.min()}  max={st.max()}")
    print(f"floor('G')={st.floor('G')}  ceiling('N')={st.ceiling('N')}")
    print(f"get('E')={st.get('E')}")
    print("level order:", " ".join(st.level_order()))

    st.delete("H")
    print(f"after delete('H'): size={st.size()}  invariants_ok={st.check()}")
    print("in order:", " ".join(st))

    print("--- SymbolTableStore ingest ---")
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = os.path.join(tmpdir, "dataset.csv")
        generate(csv_path, 10000, seed=7, key_type="int")

        store = SymbolTableStore(key_type="int")
        start_time = time.time()
        summary = store.ingest_data(csv_path)
        end_time = time.time()

        print(f"Ingested {summary.inserted} keys in {end_time - start_time:.2f}s")
        print(f"Summary: {store.summary()}")
        print(f"floor('5000')={store.floor('5000')}  ceiling('-3')={store.ceiling('-3')}")


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    run_smoke_test()
