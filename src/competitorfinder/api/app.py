"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from competitorfinder.api.routes import router

INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Find Your Top Competitors</title>
    <style>
      :root {
        color-scheme: dark;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
        --color-bg: #111827;
        --color-panel: #1f2937;
        --color-border: #374151;
        --color-accent: #2563eb;
        --color-accent-2: #4338ca;
        --color-text: #dbeafe;
        --color-muted: #93c5fd;
        --color-error: #fca5a5;
        background: var(--color-bg);
        color: var(--color-text);
      }

      body {
        margin: 0;
        min-height: 100vh;
      }

      .container {
        max-width: 1200px;
        margin: 0 auto;
        padding: 64px 16px;
      }

      header {
        text-align: center;
        margin-bottom: 48px;
      }

      header h1 {
        margin: 0 0 16px;
        font-size: 3rem;
        color: var(--color-muted);
      }

      form {
        max-width: 28rem;
        margin: 0 auto 64px;
        display: grid;
        gap: 16px;
      }

      .input-wrapper {
        position: relative;
      }

      input[type="url"] {
        box-sizing: border-box;
        width: 100%;
        height: 48px;
        padding: 12px 40px 12px 16px;
        border-radius: 12px;
        border: 2px solid var(--color-border);
        background: var(--color-panel);
        color: inherit;
      }

      .clear-input {
        position: absolute;
        right: 8px;
        top: 50%;
        transform: translateY(-50%);
        background: none;
        box-shadow: none;
        padding: 4px 8px;
        color: #6b7280;
      }

      button {
        appearance: none;
        border: none;
        border-radius: 12px;
        padding: 12px 24px;
        font-weight: 600;
        cursor: pointer;
        color: white;
        background: linear-gradient(90deg, var(--color-accent), var(--color-accent-2));
      }

      button:disabled {
        opacity: 0.5;
        cursor: wait;
      }

      .error {
        padding: 8px 12px;
        border-radius: 8px;
        border: 1px solid #991b1b;
        background: rgba(127, 29, 29, 0.3);
        color: var(--color-error);
      }

      .placeholder {
        text-align: center;
        padding: 64px 0;
        color: var(--color-muted);
      }

      .results h2 {
        text-align: center;
      }

      .grid {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(260px, 1fr));
        gap: 24px;
      }

      .card {
        padding: 24px;
        border-radius: 12px;
        border: 1px solid var(--color-border);
        background: var(--color-panel);
      }

      .card h3 {
        margin: 0 0 4px;
      }

      .card img {
        width: 40px;
        height: 40px;
        border-radius: 8px;
      }

      .card a {
        color: var(--color-muted);
        word-break: break-all;
      }

      .card .toggle {
        margin-top: 16px;
      }

      .modal-backdrop {
        position: fixed;
        inset: 0;
        background: rgba(0, 0, 0, 0.6);
        display: flex;
        align-items: center;
        justify-content: center;
      }

      .modal-backdrop[hidden] {
        display: none;
      }

      .modal {
        max-width: 720px;
        max-height: 80vh;
        overflow-y: auto;
        padding: 32px;
        border-radius: 16px;
        background: var(--color-panel);
        border: 1px solid var(--color-border);
      }

      .byline {
        font-size: 0.8rem;
        color: var(--color-muted);
      }
    </style>
  </head>
  <body>
    <div class="container">
      <header>
        <h1>Find Your Top Competitors</h1>
        <p>
          Enter your website to discover similar companies in your space and gain
          valuable insights.
        </p>
      </header>
      <form id="search-form" novalidate>
        <label for="company-url">Company URL</label>
        <div class="input-wrapper">
          <input id="company-url" type="url" placeholder="https://example.com" />
          <button id="clear-input" class="clear-input" type="button" hidden>&times;</button>
        </div>
        <div id="search-error" class="error" hidden></div>
        <button id="search-submit" type="submit">Find Competitors</button>
      </form>
      <section id="results" class="results"></section>
    </div>
    <div id="modal-backdrop" class="modal-backdrop" hidden>
      <div class="modal" role="dialog" aria-modal="true">
        <h3 id="modal-title"></h3>
        <p id="modal-byline" class="byline" hidden></p>
        <div id="modal-body"></div>
        <button id="modal-close" type="button">Close</button>
      </div>
    </div>
    <script>
      window.addEventListener("DOMContentLoaded", () => {
        const API_ROOT = "/api";
        const form = document.getElementById("search-form");
        const input = document.getElementById("company-url");
        const clearButton = document.getElementById("clear-input");
        const submitButton = document.getElementById("search-submit");
        const errorEl = document.getElementById("search-error");
        const resultsEl = document.getElementById("results");
        const modalBackdrop = document.getElementById("modal-backdrop");
        const modalTitle = document.getElementById("modal-title");
        const modalByline = document.getElementById("modal-byline");
        const modalBody = document.getElementById("modal-body");
        const modalClose = document.getElementById("modal-close");

        if (
          !form ||
          !input ||
          !clearButton ||
          !submitButton ||
          !errorEl ||
          !resultsEl ||
          !modalBackdrop ||
          !modalTitle ||
          !modalByline ||
          !modalBody ||
          !modalClose
        ) {
          return;
        }

        const proxyError = (message) => {
          const error = new Error(message);
          error.fromProxy = true;
          return error;
        };

        const invoke = async (endpoint, body) => {
          const response = await fetch(`${API_ROOT}/${endpoint}`, {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify(body),
          });
          const payload = await response.json().catch(() => null);
          if (!response.ok) {
            const message = payload && payload.error ? payload.error : `Request failed with ${response.status}`;
            throw proxyError(message);
          }
          if (payload && payload.error && !("results" in payload)) {
            throw proxyError(payload.error);
          }
          return payload;
        };

        const randomId = () =>
          window.crypto && window.crypto.randomUUID
            ? window.crypto.randomUUID()
            : `${Date.now()}-${Math.random().toString(16).slice(2)}`;

        const mapResults = (payload) => {
          if (!payload || !Array.isArray(payload.results)) {
            return null;
          }
          const seen = new Set();
          return payload.results.map((result) => {
            let id = result.id || randomId();
            if (seen.has(id)) {
              id = randomId();
            }
            seen.add(id);
            return {
              id,
              title: result.title || "Unknown Company",
              url: result.url,
              summary: result.summary,
              text: result.text,
              favicon: result.favicon,
            };
          });
        };

        const search = { generation: 0, isLoading: false, results: [] };

        const showModal = (competitor, content) => {
          modalTitle.textContent = (content && content.title) || competitor.title;
          modalBody.innerHTML = "";
          if (content && content.author && content.publishedDate) {
            modalByline.textContent = `By ${content.author} • ${content.publishedDate}`;
            modalByline.hidden = false;
          } else {
            modalByline.hidden = true;
          }

          let paragraphs = [];
          if (content && content.text) {
            paragraphs = content.text.split("\\n").filter(Boolean);
          } else if (content && content.summary) {
            paragraphs = [content.summary];
          } else {
            paragraphs = ["No detailed content available."];
          }
          paragraphs.forEach((paragraph) => {
            const p = document.createElement("p");
            p.textContent = paragraph;
            modalBody.appendChild(p);
          });
          modalBackdrop.hidden = false;
        };

        const closeModal = () => {
          modalBackdrop.hidden = true;
        };

        const createCard = (competitor) => {
          const card = { generation: 0, isExpanded: false, isLoading: false };
          const el = document.createElement("article");
          el.className = "card";

          if (competitor.favicon) {
            const icon = document.createElement("img");
            icon.src = competitor.favicon;
            icon.alt = "";
            el.appendChild(icon);
          }

          const title = document.createElement("h3");
          title.textContent = competitor.title;
          el.appendChild(title);

          const link = document.createElement("a");
          link.href = competitor.url;
          link.target = "_blank";
          link.rel = "noopener noreferrer";
          link.textContent = competitor.url;
          el.appendChild(link);

          if (competitor.summary) {
            const summary = document.createElement("p");
            summary.textContent = competitor.summary;
            el.appendChild(summary);
          }

          const toggle = document.createElement("button");
          toggle.type = "button";
          toggle.className = "toggle";
          el.appendChild(toggle);

          const status = document.createElement("div");
          el.appendChild(status);

          const render = (error) => {
            toggle.disabled = card.isLoading;
            toggle.textContent = card.isLoading ? "Loading..." : card.isExpanded ? "Show Less" : "Show More";
            status.className = error ? "error" : "";
            status.textContent = error || (card.isLoading ? "Loading content..." : "");
          };

          toggle.addEventListener("click", async () => {
            card.generation += 1;
            const generation = card.generation;

            if (card.isExpanded) {
              card.isExpanded = false;
              card.isLoading = false;
              closeModal();
              render(null);
              return;
            }

            card.isExpanded = true;
            card.isLoading = true;
            render(null);

            let error = null;
            let content = null;
            try {
              const payload = await invoke("get_contents", { urls: [competitor.url] });
              if (!payload || !Array.isArray(payload.results)) {
                throw new Error("No content found for this URL");
              }
              content = payload.results.length ? payload.results[0] : null;
            } catch (err) {
              console.error(err);
              error = (err && err.message) || "Failed to load detailed content";
            }

            if (generation !== card.generation) {
              return;
            }
            card.isLoading = false;
            render(error);
            if (!error) {
              showModal(competitor, content);
            }
          });

          render(null);
          return el;
        };

        const renderResults = () => {
          resultsEl.innerHTML = "";
          if (search.isLoading) {
            const placeholder = document.createElement("p");
            placeholder.className = "placeholder";
            placeholder.textContent = "Searching for competitors...";
            resultsEl.appendChild(placeholder);
            return;
          }
          if (!search.results.length) {
            return;
          }
          const heading = document.createElement("h2");
          heading.textContent = "Similar Companies";
          resultsEl.appendChild(heading);

          const grid = document.createElement("div");
          grid.className = "grid";
          search.results.forEach((competitor) => {
            const card = createCard(competitor);
            card.dataset.key = competitor.id;
            grid.appendChild(card);
          });
          resultsEl.appendChild(grid);
        };

        const setError = (message) => {
          errorEl.textContent = message || "";
          errorEl.hidden = !message;
        };

        const setLoading = (isLoading) => {
          search.isLoading = isLoading;
          input.disabled = isLoading;
          submitButton.disabled = isLoading;
          submitButton.textContent = isLoading ? "Searching..." : "Find Competitors";
          renderResults();
        };

        input.addEventListener("input", () => {
          clearButton.hidden = !input.value;
        });

        clearButton.addEventListener("click", () => {
          input.value = "";
          clearButton.hidden = true;
        });

        form.addEventListener("submit", async (event) => {
          event.preventDefault();
          setError(null);

          const url = input.value.trim();
          if (!url) {
            setError("Please enter a company URL");
            return;
          }

          search.generation += 1;
          const generation = search.generation;
          setLoading(true);

          let results = null;
          let error = null;
          try {
            results = mapResults(await invoke("find_similar", { url }));
            if (results === null) {
              error = "No results returned from the API";
            }
          } catch (err) {
            console.error(err);
            error = err && err.fromProxy ? err.message : "An error occurred while fetching data";
          }

          if (generation !== search.generation) {
            return;
          }
          if (error) {
            setError(error);
          } else {
            search.results = results;
          }
          setLoading(false);
        });

        modalClose.addEventListener("click", closeModal);
        modalBackdrop.addEventListener("click", (event) => {
          if (event.target === modalBackdrop) {
            closeModal();
          }
        });
      });
    </script>
  </body>
</html>
"""


def create_app() -> FastAPI:
    app = FastAPI(title="Competitor Finder", description="Similar-company search proxy API")
    app.include_router(router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return INDEX_HTML

    return app


app = create_app()
