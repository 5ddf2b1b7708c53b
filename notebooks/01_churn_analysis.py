# %% [markdown]
# # Customer Churn Analysis
# **Goal**: Understand the key drivers of customer churn in the IBM Telco dataset,
# segment the customer base and pick the models served by the dashboard.
#
# **Key Questions**:
# 1. What is the overall churn rate?
# 2. Which numeric features are skewed?
# 3. How do the categorical features split churn?
# 4. Do customers fall into natural segments?
# 5. Which classifier family ranks churners best?

# %%
import numpy as np
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt

from telco_churn.utils.config import settings
from telco_churn.etl.ingest import get_telco_data
from telco_churn.etl.simulate import simulate_customers
from telco_churn.analysis import explore
from telco_churn.analysis.segmentation import segment_customers
from telco_churn.ml import train

# Set visualization style
sns.set_theme(style="whitegrid")
plt.rcParams["figure.figsize"] = (10, 6)

# %% [markdown]
# ## 1. Load Data
# Raw file first, recoded view second.

# %%
raw = get_telco_data(raw=True)
df = get_telco_data(raw=False)
print(f"Dataset Shape: {raw.shape}")
display(explore.profile(raw))

# %% [markdown]
# ## 2. Overall Churn Rate

# %%
churn_rate = (raw['Churn'] == 'Yes').mean() * 100
print(f"Overall Churn Rate: {churn_rate:.2f}%")

for col, shares in explore.category_proportions(raw).items():
    print(shares.round(3).to_string(), end="\n\n")

# %% [markdown]
# ### Business Insight:
# - Roughly a quarter of customers churn.
# - Gender splits almost 50/50 with near-identical churn, so it is dropped before modeling.

# %%
print(explore.churn_rate_by(raw, 'gender'))
print(explore.churn_rate_by(df, 'Contract'))

# %% [markdown]
# ## 3. Distributions

# %%
explore.plot_numeric_pairs(raw)
plt.show()

explore.plot_hist_facet(raw, bins=10, ncol=5)
plt.show()

print(explore.skewed_features(raw, threshold=0.8))

# %% [markdown]
# ## 4. Churn by Category
# Placeholder levels ('No internet service', 'No phone service') are collapsed to 'No'.

# %%
explore.plot_churn_fill(df)
plt.show()

# %% [markdown]
# ### Business Insight:
# - **Month-to-month is volatile**: much higher churn than one/two year contracts.
# - Fiber optic and electronic check payers churn more; tech support and online security reduce churn.

# %% [markdown]
# ## 5. Segmentation

# %%
segments = segment_customers(raw, n_components=2, n_clusters=4)
print(segments.summary)

plt.figure(figsize=(8, 6))
sns.scatterplot(x=segments.embedding[:, 0], y=segments.embedding[:, 1],
                hue=segments.labels, palette="viridis", s=10)
plt.title('Customer Segments (PCA projection)')
plt.show()

# %% [markdown]
# ## 6. Synthetic Customers
# New customers drawn from the joint category frequencies of the existing file.

# %%
new_customers = simulate_customers(raw, n=5, rng=np.random.default_rng(settings.RANDOM_STATE))
display(new_customers)

# %% [markdown]
# ## 7. Model Selection
# Trains every candidate family, ranks by test ROC-AUC and saves the top models
# to the model directory read by the dashboard.

# %%
saved = train.main(keep=2)
print(f"Saved to {settings.MODEL_DIR}: {saved}")
