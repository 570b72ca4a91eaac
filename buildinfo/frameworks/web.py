"""Frontend and backend web frameworks."""

from buildinfo.frameworks.base import Category, Framework


class Remix(Framework):
    id = "remix"
    name = "Remix"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("@remix-run/react", "@remix-run/dev")
    config_files = ("remix.config.js", "remix.config.mjs")
    build_command = "remix build"
    build_directory = "public"
    dev_command = "remix dev"
    dev_port = 3000


class SvelteKit(Framework):
    id = "sveltekit"
    name = "SvelteKit"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("@sveltejs/kit",)
    config_files = ("svelte.config.js",)
    build_command = "vite build"
    build_directory = "build"
    dev_command = "vite dev"
    dev_port = 5173


class Angular(Framework):
    id = "angular"
    name = "Angular"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("@angular/cli",)
    config_files = ("angular.json",)
    build_command = "ng build --prod"
    build_directory = "dist"
    dev_command = "ng serve"
    dev_port = 4200
    integrations = ("angular-runtime",)


class Vue(Framework):
    id = "vue"
    name = "Vue.js"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("@vue/cli-service",)
    config_files = ("vue.config.js",)
    build_command = "vue-cli-service build"
    build_directory = "dist"
    dev_command = "vue-cli-service serve"
    dev_port = 8080


class Ember(Framework):
    id = "ember"
    name = "Ember.js"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("ember-cli",)
    config_files = ("ember-cli-build.js",)
    build_command = "ember build"
    build_directory = "dist"
    dev_command = "ember serve"
    dev_port = 4200


class CreateReactApp(Framework):
    id = "create-react-app"
    name = "Create React App"
    category = Category.FRONTEND_FRAMEWORK
    npm_dependencies = ("react-scripts",)
    build_command = "react-scripts build"
    build_directory = "build"
    dev_command = "react-scripts start"
    dev_port = 3000
    env = {"BROWSER": "none", "PORT": "3000"}


class NestJS(Framework):
    id = "nestjs"
    name = "NestJS"
    category = Category.BACKEND_FRAMEWORK
    npm_dependencies = ("@nestjs/core",)
    config_files = ("nest-cli.json",)
    build_command = "nest build"
    build_directory = "dist"
    dev_command = "nest start --watch"
    dev_port = 3000


class Express(Framework):
    id = "express"
    name = "Express"
    category = Category.BACKEND_FRAMEWORK
    npm_dependencies = ("express",)
    excluded_npm_dependencies = ("@nestjs/core",)
    dev_command = "node index.js"
    dev_port = 3000
