"""Option parsing, linking, templating and page rewriting for Go documentation pages."""