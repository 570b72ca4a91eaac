def test_buildinfo_imports():
    """Verify all buildinfo submodules can be imported without errors."""
    import buildinfo
    import buildinfo.build_info
    import buildinfo.build_systems
    import buildinfo.catalog
    import buildinfo.core.config
    import buildinfo.core.logging
    import buildinfo.core.sentry
    import buildinfo.frameworks
    import buildinfo.project
    import buildinfo.settings

    assert buildinfo.get_build_info is not None
