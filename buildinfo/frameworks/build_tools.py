"""Generic bundlers and build tools."""

from buildinfo.frameworks.base import Category, Framework


class Vite(Framework):
    id = "vite"
    name = "Vite"
    category = Category.BUILD_TOOL
    npm_dependencies = ("vite",)
    # Frameworks built on top of vite are reported on their own
    excluded_npm_dependencies = ("@sveltejs/kit", "vitepress", "@remix-run/dev", "astro")
    config_files = ("vite.config.js", "vite.config.mjs", "vite.config.ts")
    build_command = "vite build"
    build_directory = "dist"
    dev_command = "vite"
    dev_port = 5173


class Parcel(Framework):
    id = "parcel"
    name = "Parcel"
    category = Category.BUILD_TOOL
    npm_dependencies = ("parcel", "parcel-bundler")
    config_files = (".parcelrc",)
    build_command = "parcel build"
    build_directory = "dist"
    dev_command = "parcel"
    dev_port = 1234


class Webpack(Framework):
    id = "webpack"
    name = "webpack"
    category = Category.BUILD_TOOL
    npm_dependencies = ("webpack",)
    config_files = ("webpack.config.js", "webpack.config.mjs", "webpack.config.ts")
    build_command = "webpack"
    build_directory = "dist"
    dev_command = "webpack serve"
    dev_port = 8080
