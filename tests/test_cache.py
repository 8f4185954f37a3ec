from cache import PathCache


def test_revalidate_drops_entry_and_bumps_generation():
  cache = PathCache()
  cache.put("/dashboard/invoices", {"rows": 3})
  cache.put("/dashboard/customers", {"rows": 1})

  cache.revalidate_path("/dashboard/invoices")

  assert cache.get("/dashboard/invoices") is None
  assert cache.get("/dashboard/customers") == {"rows": 1}
  assert cache.generation("/dashboard/invoices") == 1
  assert cache.generation("/dashboard/customers") == 0


def test_revalidate_unknown_path():
  cache = PathCache()
  cache.revalidate_path("/nowhere")
  cache.revalidate_path("/nowhere")
  assert cache.generation("/nowhere") == 2
