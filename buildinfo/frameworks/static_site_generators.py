"""Static site generators."""

from buildinfo.frameworks.base import Category, Framework


class Next(Framework):
    id = "next"
    name = "Next.js"
    category = Category.SSG
    npm_dependencies = ("next",)
    config_files = ("next.config.js", "next.config.mjs", "next.config.ts")
    build_command = "next build"
    build_directory = ".next"
    dev_command = "next"
    dev_port = 3000
    integrations = ("nextjs-runtime",)


class Nuxt(Framework):
    id = "nuxt"
    name = "Nuxt"
    category = Category.SSG
    npm_dependencies = ("nuxt", "nuxt3", "nuxt-edge")
    config_files = ("nuxt.config.js", "nuxt.config.ts", "nuxt.config.mjs")
    build_command = "nuxt build"
    build_directory = ".output/public"
    dev_command = "nuxt dev"
    dev_port = 3000


class Gatsby(Framework):
    id = "gatsby"
    name = "Gatsby"
    category = Category.SSG
    npm_dependencies = ("gatsby",)
    config_files = ("gatsby-config.js", "gatsby-config.ts", "gatsby-config.mjs")
    build_command = "gatsby build"
    build_directory = "public"
    dev_command = "gatsby develop"
    dev_port = 8000
    env = {"GATSBY_PRECOMPILE_DEVELOP_FUNCTIONS": "true"}
    integrations = ("gatsby-cache",)


class Astro(Framework):
    id = "astro"
    name = "Astro"
    category = Category.SSG
    npm_dependencies = ("astro",)
    config_files = ("astro.config.mjs", "astro.config.js", "astro.config.ts")
    build_command = "astro build"
    build_directory = "dist"
    dev_command = "astro dev"
    dev_port = 4321


class Docusaurus(Framework):
    id = "docusaurus"
    name = "Docusaurus"
    category = Category.SSG
    npm_dependencies = ("@docusaurus/core",)
    config_files = ("docusaurus.config.js", "docusaurus.config.ts")
    build_command = "docusaurus build"
    build_directory = "build"
    dev_command = "docusaurus start --port 3000"
    dev_port = 3000


class Eleventy(Framework):
    id = "eleventy"
    name = "Eleventy"
    category = Category.SSG
    npm_dependencies = ("@11ty/eleventy",)
    config_files = (".eleventy.js", "eleventy.config.js", "eleventy.config.cjs")
    build_command = "eleventy"
    build_directory = "_site"
    dev_command = "eleventy --serve"
    dev_port = 8080


class VitePress(Framework):
    id = "vitepress"
    name = "VitePress"
    category = Category.SSG
    npm_dependencies = ("vitepress",)
    config_files = (".vitepress/config.js", ".vitepress/config.mts", ".vitepress/config.ts")
    build_command = "vitepress build"
    build_directory = ".vitepress/dist"
    dev_command = "vitepress dev"
    dev_port = 5173


class Hugo(Framework):
    id = "hugo"
    name = "Hugo"
    category = Category.SSG
    config_files = ("hugo.toml", "hugo.yaml", "hugo.json")
    build_command = "hugo"
    build_directory = "public"
    dev_command = "hugo server -w"
    dev_port = 1313
