"""
Streamlit interface for TikTok hashtag scraping.
Simple UI that wraps around the HashtagScraper run.
"""

import asyncio
import io
import json
from datetime import datetime

import pandas as pd
import streamlit as st

from tiktok_hashtags.config import MODES, load_input
from tiktok_hashtags.errors import InputError
from tiktok_hashtags.scraper import HashtagScraper
from tiktok_hashtags.sinks import records_to_dataframe


class _MemorySink:
    """Keeps records in the session instead of writing files."""

    def __init__(self):
        self.records = []

    def append(self, records):
        self.records.extend(records)


def process_records_for_export(records):
    """
    Flattens enriched records into one row per hashtag.

    Args:
        records: List of HashtagRecord

    Returns:
        DataFrame with one column per exported value
    """
    if not records:
        return pd.DataFrame()

    rows = []
    for record in records:
        row = {
            'hashtag': record.hashtag,
            'views': record.views_display,
            'posts': record.posts_display,
            'origin': record.origin,
            'position': record.position,
            'related_hashtags': ', '.join(record.related_hashtags or []),
            'scraped_at': record.scraped_at,
        }
        if record.top_videos:
            video = record.top_videos[0]
            row['top_video_author'] = video.author
            row['top_video_views'] = video.views
            row['top_video_likes'] = video.likes
        if record.sentiment_summary:
            row['sentiment'] = record.sentiment_summary.classification
            row['sentiment_score'] = record.sentiment_summary.average_score
        if record.top_influencers:
            influencer = record.top_influencers[0]
            row['top_influencer'] = influencer.username
            row['top_influencer_followers'] = influencer.follower_count
        if record.extraction_error:
            row['error'] = record.extraction_error
        rows.append(row)

    return pd.DataFrame(rows)


async def run_scraper(scraper_input, browser_manager=None):
    """
    Run the hashtag scraper asynchronously.

    Args:
        scraper_input: ScraperInput for the run, always with json output
        browser_manager: Optional replacement for the Playwright browser

    Returns:
        List of enriched hashtag records
    """
    sink = _MemorySink()
    scraper = HashtagScraper(
        scraper_input, browser_manager=browser_manager, dataset_sink=sink
    )
    await scraper.run()
    return sink.records


def create_excel_download(df):
    """
    Create an Excel file in memory for download.

    Args:
        df: DataFrame to convert to Excel

    Returns:
        BytesIO buffer containing Excel file
    """
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        df.to_excel(writer, index=False, sheet_name='TikTok_Hashtags')

        workbook = writer.book
        worksheet = writer.sheets['TikTok_Hashtags']

        header_format = workbook.add_format({
            'bold': True,
            'text_wrap': True,
            'valign': 'top',
            'fg_color': '#D7E4BC',
            'border': 1
        })

        for col_num, value in enumerate(df.columns.values):
            worksheet.write(0, col_num, value, header_format)

        # Auto-adjust column widths
        for i, col in enumerate(df.columns):
            column_len = max(df[col].astype(str).str.len().max(), len(col)) + 2
            worksheet.set_column(i, i, min(column_len, 50))

    output.seek(0)
    return output


def main():
    """Main Streamlit application."""

    st.set_page_config(
        page_title="TikTok Hashtag Scraper",
        page_icon="🎵",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    st.title("🎵 TikTok Hashtag Scraper")
    st.markdown("---")
    st.markdown("""
    **Discover trending TikTok hashtags or look up your own**

    Each hashtag can be enriched with:
    - A representative video
    - Related hashtags
    - A sentiment summary
    - A top influencer
    """)

    st.sidebar.header("⚙️ Scraping Configuration")

    mode = st.sidebar.selectbox("Mode", MODES, index=0)

    hashtags_text = ''
    if mode != 'trending':
        hashtags_text = st.sidebar.text_area(
            "Hashtags",
            placeholder="dance\ncooking\nfunny",
            help="One hashtag per line, with or without #"
        )

    max_results = st.sidebar.slider(
        "Maximum trending hashtags",
        min_value=1,
        max_value=50,
        value=10,
        disabled=mode != 'trending'
    )

    st.sidebar.subheader("Enrichment")
    include_video_details = st.sidebar.checkbox("Video details", value=True)
    include_related_hashtags = st.sidebar.checkbox("Related hashtags", value=True)
    include_sentiment_analysis = st.sidebar.checkbox("Sentiment analysis", value=False)
    include_influencers = st.sidebar.checkbox("Influencers", value=False)

    hashtags = [line for line in hashtags_text.splitlines() if line.strip()]

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Note:** Looking up many hashtags may take a few minutes.")

    col1, col2 = st.columns([2, 1])

    with col1:
        if st.button("🚀 Start Scraping", type="primary"):
            progress_bar = st.progress(0)
            status_text = st.empty()

            try:
                scraper_input = load_input({
                    'mode': mode,
                    'hashtags': hashtags,
                    'max_results': max_results,
                    'include_video_details': include_video_details,
                    'include_related_hashtags': include_related_hashtags,
                    'include_sentiment_analysis': include_sentiment_analysis,
                    'include_influencers': include_influencers,
                })
            except InputError as e:
                st.error(str(e))
                return

            try:
                status_text.text("🌐 Loading TikTok pages...")
                progress_bar.progress(30)

                records = asyncio.run(run_scraper(scraper_input))

                progress_bar.progress(80)
                status_text.text("📝 Processing results...")

                if records:
                    df = process_records_for_export(records)

                    progress_bar.progress(100)
                    status_text.text("✅ Scraping completed!")
                    st.success(f"Collected {len(records)} hashtags!")

                    failed = sum(1 for r in records if r.extraction_error)
                    if failed:
                        st.warning(
                            f"{failed} hashtags could not be loaded live and use placeholder values."
                        )

                    st.subheader("📋 Results")
                    st.dataframe(df, use_container_width=True)

                    st.subheader("💾 Download Results")
                    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

                    st.download_button(
                        label="📥 Download JSON",
                        data=json.dumps([r.to_dict() for r in records], indent=2),
                        file_name=f"tiktok_hashtags_{timestamp}.json",
                        mime="application/json"
                    )
                    st.download_button(
                        label="📥 Download CSV",
                        data=records_to_dataframe(records).to_csv(index=False),
                        file_name=f"hashtag_results_{timestamp}.csv",
                        mime="text/csv"
                    )
                    st.download_button(
                        label="📥 Download Excel File",
                        data=create_excel_download(df).getvalue(),
                        file_name=f"tiktok_hashtags_{timestamp}.xlsx",
                        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
                    )
                else:
                    progress_bar.progress(100)
                    status_text.text("❌ No hashtags found")
                    st.warning("No hashtags were found. The page layout may have changed.")

            except Exception as e:
                progress_bar.progress(100)
                status_text.text("❌ Error occurred")
                st.error(f"An error occurred during scraping: {str(e)}")

    with col2:
        st.subheader("ℹ️ How it works")
        st.markdown("""
        1. **Pick a mode**: trending, search or monitor
        2. **Enter hashtags** for search and monitor
        3. **Choose enrichments**
        4. **Click Start Scraping**
        5. **Download** JSON, CSV or Excel

        **Notes:**
        - When TikTok cannot be loaded, trending mode returns a reference list
        - Hashtags that fail to load are marked with an error
        - Video, sentiment and influencer data are sample values
        """)


if __name__ == "__main__":
    main()
