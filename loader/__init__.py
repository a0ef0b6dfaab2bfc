"""
loader - CSV product load pipeline.

Entry points:
    loader.load_session.run_load(file_content, options) → LoadReport
    loader.load_session.LoadSession(store, catalog, options).perform(table)

Modules, leaf first:
    delimiters     cell mini-grammar
    operators      header → operator catalog
    header_mapper  header row → ordered column bindings
    populator      default attribute / association assignment
    variants, taxons, properties, variant_fields, images
                   specialised builders
    row_processor  per-row state machine
    load_session   file transaction + report
"""
